# topmark:header:start
#
#   project      : Dutis
#   file         : macos.py
#   file_relpath : src/dutis/platform/macos.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""macOS platform capability.

The registry itself is reached through the
[`CoreServicesBridge`][dutis.platform.launch_services.CoreServicesBridge]. On
top of it this module provides the permissive fallback used when the registry
knows no handler for a suffix, in two tiers:

1. **Declared extensions**: applications whose ``Info.plist`` lists the suffix.
2. **Probing** (opt-in): open a synthetic empty ``probe.<suffix>`` file with
   every installed application via ``open -g -a`` and keep those that accept
   it. This is slow and side-effecting (it may visibly launch applications),
   so it only runs when tier 1 found nothing and probing is enabled.
"""

from __future__ import annotations

import subprocess
import tempfile
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from dutis.config.logging import get_logger
from dutis.constants import DEFAULT_APPLICATION_DIRS, GENERIC_CATEGORY
from dutis.core.types import HandlerIdentifier, normalize_suffix
from dutis.platform.apps import expand_search_dirs, load_bundles, match_declared
from dutis.platform.base import LaunchServicesLike, LSRole, PlatformCapability
from dutis.platform.launch_services import CoreServicesBridge

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from dutis.config.logging import DutisLogger
    from dutis.platform.apps import ApplicationBundle

logger: DutisLogger = get_logger(__name__)

# Signature of `subprocess.run` as used by the probing tier.
Runner = Callable[..., "subprocess.CompletedProcess[Any]"]

PROBE_TIMEOUT_SECONDS: float = 15.0


class MacOSPlatform(PlatformCapability):
    """Platform capability backed by LaunchServices and the installed applications.

    Args:
        native (LaunchServicesLike | None): Native service; defaults to a
            `CoreServicesBridge`.
        search_dirs (Iterable[str]): Directories scanned for ``.app`` bundles (``~`` expanded).
        role (LSRole): Role used for single registry reads.
        probe (bool): Enable the slow probing tier.
        runner (Runner | None): Replacement for `subprocess.run` (tests).
    """

    name = "macos"

    def __init__(
        self,
        *,
        native: LaunchServicesLike | None = None,
        search_dirs: Iterable[str] = DEFAULT_APPLICATION_DIRS,
        role: LSRole = LSRole.ALL,
        probe: bool = False,
        runner: Runner | None = None,
    ) -> None:
        self._native: LaunchServicesLike = native or CoreServicesBridge()
        self._search_dirs: list[Path] = expand_search_dirs(search_dirs)
        self._role = role
        self.probe = probe
        self._runner: Runner = runner or subprocess.run

    @property
    def native(self) -> LaunchServicesLike:
        return self._native

    @cached_property
    def bundles(self) -> Sequence[ApplicationBundle]:
        """Installed application bundles, read once per platform instance."""
        return tuple(load_bundles(self._search_dirs))

    def find_handlers_for_content_type(self, content_type: str) -> list[HandlerIdentifier]:
        handlers = self._native.copy_all_role_handlers(content_type, self._role) or []
        return sorted({HandlerIdentifier(h) for h in handlers if h})

    def find_handlers_for_extension(self, suffix: str) -> list[HandlerIdentifier]:
        normalized = normalize_suffix(suffix)

        declared = match_declared(self.bundles, normalized)
        if declared:
            logger.debug("%d applications declare .%s", len(declared), normalized)
            return sorted({HandlerIdentifier(b.handler_id) for b in declared})

        if not self.probe:
            logger.debug("No application declares .%s; probing disabled", normalized)
            return []

        logger.info("Probing %d applications for .%s", len(self.bundles), normalized)
        return sorted(self._probe(normalized))

    def scan_installed_applications(self) -> Mapping[str, list[HandlerIdentifier]]:
        handlers = sorted({HandlerIdentifier(b.handler_id) for b in self.bundles})
        return {GENERIC_CATEGORY: handlers}

    def _probe(self, suffix: str) -> set[HandlerIdentifier]:
        accepted: set[HandlerIdentifier] = set()
        with tempfile.TemporaryDirectory(prefix="dutis-probe-") as tmp:
            probe_file = Path(tmp) / f"probe.{suffix}"
            probe_file.write_bytes(b"")
            for bundle in self.bundles:
                if self._accepts(bundle, probe_file):
                    accepted.add(HandlerIdentifier(bundle.handler_id))
        logger.debug("Probing accepted %d applications for .%s", len(accepted), suffix)
        return accepted

    def _accepts(self, bundle: ApplicationBundle, probe_file: Path) -> bool:
        cmd = ["open", "-g", "-a", str(bundle.path), str(probe_file)]
        try:
            proc = self._runner(
                cmd,
                check=False,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=PROBE_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Probe of %s failed: %s", bundle.name, e)
            return False
        logger.trace("Probe of %s returned %s", bundle.name, proc.returncode)
        return proc.returncode == 0
