# topmark:header:start
#
#   project      : Dutis
#   file         : launch_services.py
#   file_relpath : src/dutis/platform/launch_services.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""ctypes bridge to the CoreServices type and LaunchServices registry APIs.

This is the only module that touches raw CoreFoundation handles. It converts
every returned `CFStringRef` / `CFArrayRef` into Python values and releases the
handles it owns, so the rest of Dutis only ever sees `str` and `list[str]`.

Ownership follows the CoreFoundation naming rules:

- *Create* / *Copy* functions hand ownership to the caller, who must
  `CFRelease` the result exactly once.
- *Get* functions return borrowed references that must **not** be released
  and are only valid while their owner is alive.

The frameworks are loaded lazily on first use so that importing this module is
safe on every platform.
"""

from __future__ import annotations

import ctypes
from contextlib import contextmanager
from functools import cached_property
from typing import TYPE_CHECKING, Final

from dutis.config.logging import get_logger
from dutis.platform.base import LaunchServicesLike, LSRole

if TYPE_CHECKING:
    from collections.abc import Iterator

    from dutis.config.logging import DutisLogger

logger: DutisLogger = get_logger(__name__)

CORE_FOUNDATION_PATH: Final[str] = "/System/Library/Frameworks/CoreFoundation.framework/CoreFoundation"
CORE_SERVICES_PATH: Final[str] = "/System/Library/Frameworks/CoreServices.framework/CoreServices"

K_CF_STRING_ENCODING_UTF8: Final[int] = 0x08000100

CFTypeRef = ctypes.c_void_p
CFStringRef = ctypes.c_void_p
CFArrayRef = ctypes.c_void_p
CFIndex = ctypes.c_long
CFStringEncoding = ctypes.c_uint32
LSRolesMask = ctypes.c_uint32
OSStatus = ctypes.c_int32


class _Frameworks:
    """Loaded CoreFoundation and CoreServices libraries with declared signatures."""

    def __init__(self, core_foundation: ctypes.CDLL, core_services: ctypes.CDLL) -> None:
        self.cf = core_foundation
        self.cs = core_services

        cf = self.cf
        cf.CFStringCreateWithCString.argtypes = [ctypes.c_void_p, ctypes.c_char_p, CFStringEncoding]
        cf.CFStringCreateWithCString.restype = CFStringRef
        cf.CFStringGetLength.argtypes = [CFStringRef]
        cf.CFStringGetLength.restype = CFIndex
        cf.CFStringGetMaximumSizeForEncoding.argtypes = [CFIndex, CFStringEncoding]
        cf.CFStringGetMaximumSizeForEncoding.restype = CFIndex
        cf.CFStringGetCString.argtypes = [CFStringRef, ctypes.c_char_p, CFIndex, CFStringEncoding]
        cf.CFStringGetCString.restype = ctypes.c_bool
        cf.CFArrayGetCount.argtypes = [CFArrayRef]
        cf.CFArrayGetCount.restype = CFIndex
        cf.CFArrayGetValueAtIndex.argtypes = [CFArrayRef, CFIndex]
        cf.CFArrayGetValueAtIndex.restype = CFTypeRef
        cf.CFRelease.argtypes = [CFTypeRef]
        cf.CFRelease.restype = None

        cs = self.cs
        cs.UTTypeCreatePreferredIdentifierForTag.argtypes = [CFStringRef, CFStringRef, CFStringRef]
        cs.UTTypeCreatePreferredIdentifierForTag.restype = CFStringRef
        cs.LSCopyAllRoleHandlersForContentType.argtypes = [CFStringRef, LSRolesMask]
        cs.LSCopyAllRoleHandlersForContentType.restype = CFArrayRef
        cs.LSSetDefaultRoleHandlerForContentType.argtypes = [CFStringRef, LSRolesMask, CFStringRef]
        cs.LSSetDefaultRoleHandlerForContentType.restype = OSStatus


class CoreServicesBridge(LaunchServicesLike):
    """`LaunchServicesLike` implementation backed by the macOS frameworks.

    Args:
        core_foundation_path (str): Path of the CoreFoundation framework binary.
        core_services_path (str): Path of the CoreServices framework binary.
    """

    def __init__(
        self,
        *,
        core_foundation_path: str = CORE_FOUNDATION_PATH,
        core_services_path: str = CORE_SERVICES_PATH,
    ) -> None:
        self._cf_path = core_foundation_path
        self._cs_path = core_services_path

    @cached_property
    def _fw(self) -> _Frameworks:
        logger.debug("Loading frameworks: %s, %s", self._cf_path, self._cs_path)
        return _Frameworks(ctypes.CDLL(self._cf_path), ctypes.CDLL(self._cs_path))

    # --- CoreFoundation conversions ---

    @contextmanager
    def _cfstring(self, text: str) -> Iterator[int | None]:
        """Yield a temporary CFString for ``text``; released on exit."""
        # Create rule: we own the new string and release it when the block ends.
        ref = self._fw.cf.CFStringCreateWithCString(
            None, text.encode("utf-8"), K_CF_STRING_ENCODING_UTF8
        )
        try:
            yield ref
        finally:
            if ref:
                self._fw.cf.CFRelease(ref)

    def _to_str(self, ref: int | None) -> str | None:
        """Copy a CFString's contents into a Python str. Does not release ``ref``."""
        if not ref:
            return None
        cf = self._fw.cf
        length = cf.CFStringGetLength(ref)
        size = cf.CFStringGetMaximumSizeForEncoding(length, K_CF_STRING_ENCODING_UTF8) + 1
        buf = ctypes.create_string_buffer(size)
        if not cf.CFStringGetCString(ref, buf, size, K_CF_STRING_ENCODING_UTF8):
            logger.warning("CFStringGetCString failed for a string of length %d", length)
            return None
        return buf.value.decode("utf-8")

    def _take_str(self, ref: int | None) -> str | None:
        """Receive ownership of a CFString, convert it, then release it."""
        if not ref:
            return None
        try:
            return self._to_str(ref)
        finally:
            # The owned value is now a Python str; the handle is no longer valid.
            self._fw.cf.CFRelease(ref)

    def _take_str_array(self, ref: int | None) -> list[str] | None:
        """Receive ownership of a CFArray of CFStrings, convert it, then release it."""
        if not ref:
            return None
        cf = self._fw.cf
        try:
            result: list[str] = []
            for i in range(cf.CFArrayGetCount(ref)):
                # Get rule: the element is borrowed from the array; never release it.
                item = self._to_str(cf.CFArrayGetValueAtIndex(ref, i))
                if item:
                    result.append(item)
            return result
        finally:
            # Releasing the array also drops the borrowed elements read above.
            cf.CFRelease(ref)

    # --- LaunchServicesLike ---

    def preferred_identifier_for_tag(self, tag_class: str, tag: str) -> str | None:
        with self._cfstring(tag_class) as cf_class, self._cfstring(tag) as cf_tag:
            # Create rule: the returned identifier is ours to release.
            ref = self._fw.cs.UTTypeCreatePreferredIdentifierForTag(cf_class, cf_tag, None)
            return self._take_str(ref)

    def copy_all_role_handlers(self, content_type: str, role: LSRole) -> list[str] | None:
        with self._cfstring(content_type) as cf_type:
            # Copy rule: the returned array is ours to release.
            ref = self._fw.cs.LSCopyAllRoleHandlersForContentType(cf_type, int(role))
            return self._take_str_array(ref)

    def set_default_role_handler(self, content_type: str, role: LSRole, handler: str) -> int:
        with self._cfstring(content_type) as cf_type, self._cfstring(handler) as cf_handler:
            return int(
                self._fw.cs.LSSetDefaultRoleHandlerForContentType(cf_type, int(role), cf_handler)
            )
