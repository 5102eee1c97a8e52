# topmark:header:start
#
#   project      : Dutis
#   file         : apps.py
#   file_relpath : src/dutis/platform/apps.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Discovery of installed application bundles and their declared extensions.

An application bundle is a ``*.app`` directory whose ``Contents/Info.plist``
declares, among other things, its bundle identifier and the document types it
can open (``CFBundleDocumentTypes[*].CFBundleTypeExtensions``).
"""

from __future__ import annotations

import plistlib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dutis.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from dutis.config.logging import DutisLogger

logger: DutisLogger = get_logger(__name__)

APP_BUNDLE_SUFFIX = ".app"


@dataclass(frozen=True)
class ApplicationBundle:
    """An installed application.

    Attributes:
        path (Path): Location of the ``.app`` bundle.
        name (str): Display name (``CFBundleDisplayName``, ``CFBundleName``, or the file stem).
        bundle_id (str | None): ``CFBundleIdentifier`` if declared.
        extensions (tuple[str, ...]): Sorted, lower-cased suffixes the bundle declares.
    """

    path: Path
    name: str
    bundle_id: str | None = None
    extensions: tuple[str, ...] = ()

    @property
    def handler_id(self) -> str:
        """Identifier to report for this bundle: its bundle id, else its name."""
        return self.bundle_id or self.name


def expand_search_dirs(raw_dirs: Iterable[str]) -> list[Path]:
    """Expand ``~`` in configured search directories, preserving order."""
    return [Path(d).expanduser() for d in raw_dirs]


def discover_applications(search_dirs: Iterable[Path]) -> list[Path]:
    """Return the ``.app`` bundles directly inside ``search_dirs``.

    Missing or unreadable directories are skipped. The result is deduplicated
    and sorted.
    """
    found: set[Path] = set()
    for base in search_dirs:
        try:
            entries = list(base.iterdir())
        except OSError as e:
            logger.debug("Skipping application directory %s: %s", base, e)
            continue
        for entry in entries:
            if entry.suffix == APP_BUNDLE_SUFFIX and entry.is_dir():
                found.add(entry)
    apps = sorted(found)
    logger.debug("Discovered %d application bundles", len(apps))
    return apps


def _read_info_plist(app_path: Path) -> dict[str, Any]:
    plist_path = app_path / "Contents" / "Info.plist"
    try:
        with plist_path.open("rb") as fh:
            data = plistlib.load(fh)
    except OSError as e:
        logger.debug("No readable Info.plist for %s: %s", app_path, e)
        return {}
    except (plistlib.InvalidFileException, ValueError) as e:
        logger.warning("Malformed Info.plist in %s: %s", app_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _declared_extensions(info: Mapping[str, Any]) -> tuple[str, ...]:
    exts: set[str] = set()
    doc_types = info.get("CFBundleDocumentTypes") or []
    if not isinstance(doc_types, list):
        return ()
    for doc_type in doc_types:
        if not isinstance(doc_type, dict):
            continue
        for ext in doc_type.get("CFBundleTypeExtensions") or []:
            if not isinstance(ext, str):
                continue
            cleaned = ext.strip().lstrip(".").lower()
            # "*" declares "any extension"; it says nothing about a specific suffix
            if cleaned and cleaned != "*":
                exts.add(cleaned)
    return tuple(sorted(exts))


def read_bundle(app_path: Path) -> ApplicationBundle:
    """Read an application bundle's metadata from its ``Info.plist``.

    Bundles without a readable plist are still returned, named after their
    file stem and declaring nothing.
    """
    info = _read_info_plist(app_path)
    name = ""
    for key in ("CFBundleDisplayName", "CFBundleName"):
        value = info.get(key)
        if isinstance(value, str) and value.strip():
            name = value.strip()
            break
    bundle_id = info.get("CFBundleIdentifier")
    return ApplicationBundle(
        path=app_path,
        name=name or app_path.stem,
        bundle_id=bundle_id if isinstance(bundle_id, str) and bundle_id else None,
        extensions=_declared_extensions(info),
    )


def load_bundles(search_dirs: Iterable[Path]) -> list[ApplicationBundle]:
    """Discover and read every application bundle in ``search_dirs``."""
    return [read_bundle(p) for p in discover_applications(search_dirs)]


def declared_extensions(bundles: Iterable[ApplicationBundle]) -> dict[str, tuple[str, ...]]:
    """Map application display names to the suffixes they declare (declaring apps only)."""
    return {b.name: b.extensions for b in bundles if b.extensions}


def match_declared(bundles: Iterable[ApplicationBundle], suffix: str) -> list[ApplicationBundle]:
    """Return the bundles declaring ``suffix``, sorted by display name."""
    return sorted((b for b in bundles if suffix in b.extensions), key=lambda b: b.name)
