# topmark:header:start
#
#   project      : Dutis
#   file         : conftest.py
#   file_relpath : tests/platform/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Helpers for building fake application bundles on disk."""

from __future__ import annotations

import plistlib
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def make_app(
    apps_dir: Path,
    stem: str,
    *,
    bundle_id: str | None = None,
    extensions: Sequence[str] = (),
    display_name: str | None = None,
    extra: dict[str, Any] | None = None,
) -> Path:
    """Create ``<apps_dir>/<stem>.app`` with a minimal ``Contents/Info.plist``."""
    app = apps_dir / f"{stem}.app"
    contents = app / "Contents"
    contents.mkdir(parents=True)
    info: dict[str, Any] = {"CFBundleName": stem}
    if bundle_id:
        info["CFBundleIdentifier"] = bundle_id
    if display_name:
        info["CFBundleDisplayName"] = display_name
    if extensions:
        info["CFBundleDocumentTypes"] = [{"CFBundleTypeExtensions": list(extensions)}]
    info.update(extra or {})
    with (contents / "Info.plist").open("wb") as fh:
        plistlib.dump(info, fh)
    return app
