# topmark:header:start
#
#   project      : Dutis
#   file         : catalog.py
#   file_relpath : src/dutis/catalog.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Human-readable content-type names and named suffix groups.

`ContentTypeCatalog` is built once from the frozen `Config` and passed by
reference; it is immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from dutis.config.logging import get_logger
from dutis.core.types import is_dynamic

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dutis.config.logging import DutisLogger
    from dutis.config.model import Config
    from dutis.core.types import Suffix

logger: DutisLogger = get_logger(__name__)

# Display names for well-known identifiers; anything else is shown verbatim.
FRIENDLY_NAMES: Mapping[str, str] = MappingProxyType(
    {
        # Video
        "public.mpeg-4": "MPEG-4 Video",
        "public.mp4": "MP4 Video",
        "public.mpeg": "MPEG Video",
        "public.avi": "AVI Video",
        "public.mov": "QuickTime Movie",
        "com.apple.quicktime-movie": "QuickTime Movie",
        "com.apple.m4v-video": "M4V Video",
        "org.matroska.mkv": "Matroska Video",
        # Audio
        "public.mp3": "MP3 Audio",
        "com.microsoft.waveform-audio": "WAV Audio",
        "public.wav": "WAV Audio",
        "public.aiff-audio": "AIFF Audio",
        "public.aiff": "AIFF Audio",
        "public.m4a": "M4A Audio",
        "com.apple.m4a-audio": "M4A Audio",
        "org.xiph.flac": "FLAC Audio",
        "public.audio": "Audio",
        # Images
        "public.jpeg": "JPEG Image",
        "public.png": "PNG Image",
        "com.compuserve.gif": "GIF Image",
        "public.gif": "GIF Image",
        "com.apple.pict": "PICT Image",
        "public.svg-image": "SVG Image",
        "public.tiff": "TIFF Image",
        "public.heic": "HEIC Image",
        "org.webmproject.webp": "WebP Image",
        # Documents
        "public.plain-text": "Plain Text",
        "public.text": "Text",
        "public.html": "HTML Document",
        "public.xml": "XML Document",
        "public.json": "JSON Document",
        "com.adobe.pdf": "PDF Document",
        "com.microsoft.word.doc": "Word Document",
        "org.openxmlformats.wordprocessingml.document": "Word Document",
        "public.rtf": "Rich Text Document",
        "net.daringfireball.markdown": "Markdown Document",
        "public.markdown": "Markdown Document",
        # Source code
        "public.python-script": "Python Source",
        "com.netscape.javascript-source": "JavaScript Source",
        "public.javascript-source": "JavaScript Source",
        "public.ruby-script": "Ruby Source",
        "public.go-source": "Go Source",
        "public.rust-source": "Rust Source",
        "public.c-source": "C Source",
        "public.c-header": "C Header",
        "public.c-plus-plus-source": "C++ Source",
        "public.swift-source": "Swift Source",
        "com.sun.java-source": "Java Source",
        "public.java-source": "Java Source",
        "public.shell-script": "Shell Script",
        # Archives
        "public.zip-archive": "ZIP Archive",
        "org.gnu.gnu-zip-archive": "GZIP Archive",
        "public.tar-archive": "TAR Archive",
        "org.7-zip.7-zip-archive": "7Z Archive",
        "com.rarlab.rar-archive": "RAR Archive",
    }
)


@dataclass(frozen=True)
class ContentTypeCatalog:
    """Immutable lookup of friendly names and suffix groups.

    Attributes:
        names (Mapping[str, str]): Identifier to display name.
        groups (Mapping[str, tuple[Suffix, ...]]): Group name to member suffixes.
    """

    names: Mapping[str, str] = field(default_factory=lambda: FRIENDLY_NAMES)
    groups: Mapping[str, tuple[Suffix, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def friendly_name(self, identifier: str) -> str:
        """Return the display name of an identifier, or the identifier itself."""
        name = self.names.get(identifier)
        if name is not None:
            return name
        if is_dynamic(identifier):
            return "Unrecognized type"
        return identifier

    def group(self, name: str) -> tuple[Suffix, ...] | None:
        """Return the suffixes of a named group, or None if it is not defined."""
        return self.groups.get(name.strip().lower())

    def group_names(self) -> list[str]:
        """Return the defined group names, sorted."""
        return sorted(self.groups)


def build_catalog(config: Config) -> ContentTypeCatalog:
    """Build the catalog from a frozen `Config`."""
    groups = MappingProxyType({name.lower(): tuple(sfx) for name, sfx in config.groups.items()})
    logger.debug("Catalog built with %d groups", len(groups))
    return ContentTypeCatalog(names=FRIENDLY_NAMES, groups=groups)
