# topmark:header:start
#
#   project      : Dutis
#   file         : io.py
#   file_relpath : src/dutis/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""TOML I/O and value getters for Dutis configuration.

Parsing and rendering are done with `tomlkit`; parsed documents are returned
as plain `dict` structures.

The *checked* getters validate the expected shape of a value and record a
WARNING in a `DiagnosticLog` (and log a warning) when the value is present but
malformed. They return ``None`` both when the key is absent and when the value
is rejected, so a bad value never overrides a lower configuration layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from dutis.config.keys import Toml
from dutis.config.logging import get_logger
from dutis.constants import (
    DEFAULT_APPLICATION_DIRS,
    DEFAULT_ASSIGN_ATTEMPTS,
    DEFAULT_DELAY_MS,
    DEFAULT_QUERY_ATTEMPTS,
    DEFAULT_ROLE,
)

if TYPE_CHECKING:
    from pathlib import Path

    from dutis.config.logging import DutisLogger
    from dutis.core.diagnostics import DiagnosticLog

logger: DutisLogger = get_logger(__name__)

TomlValue = Any
TomlTable = dict[str, TomlValue]

# Built-in suffix groups; users extend or override them under [groups].
DEFAULT_GROUPS: dict[str, list[str]] = {
    "video": ["mp4", "mov", "m4v", "avi", "mkv", "webm", "wmv", "flv", "mpg", "mpeg"],
    "audio": ["mp3", "m4a", "aac", "wav", "flac", "aiff", "ogg", "opus", "wma"],
    "image": ["png", "jpg", "jpeg", "gif", "bmp", "tiff", "tif", "webp", "heic", "svg"],
    "text": ["txt", "md", "markdown", "rst", "log", "csv", "tsv"],
    "code": [
        "py", "js", "ts", "tsx", "jsx", "rs", "go", "swift", "c", "h", "cpp", "hpp",
        "java", "kt", "rb", "sh", "json", "yaml", "yml", "toml", "xml", "html", "css",
    ],  # fmt: skip
    "archive": ["zip", "tar", "gz", "tgz", "bz2", "xz", "7z", "rar"],
    "document": ["pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "rtf", "pages"],
}


def load_defaults_dict() -> TomlTable:
    """Return the runtime defaults as a TOML-compatible dict.

    Performs no I/O. The returned value is a new dict so callers can mutate it.
    """
    return {
        Toml.SECTION_CONVERGENCE: {
            Toml.KEY_QUERY_ATTEMPTS: DEFAULT_QUERY_ATTEMPTS,
            Toml.KEY_ASSIGN_ATTEMPTS: DEFAULT_ASSIGN_ATTEMPTS,
            Toml.KEY_DELAY_MS: DEFAULT_DELAY_MS,
        },
        Toml.SECTION_HANDLERS: {
            Toml.KEY_ROLE: DEFAULT_ROLE,
            Toml.KEY_PROBE_FALLBACK: False,
        },
        Toml.SECTION_APPLICATIONS: {
            Toml.KEY_SEARCH_DIRS: list(DEFAULT_APPLICATION_DIRS),
        },
        Toml.SECTION_GROUPS: {name: list(suffixes) for name, suffixes in DEFAULT_GROUPS.items()},
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed content; empty on any read or parse error.

    Notes:
        Errors are logged, not raised. Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def _strip_none_for_toml(value: object) -> object:
    """Remove `None` entries from mappings and lists (TOML has no null)."""
    if isinstance(value, Mapping):
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        return {str(k): _strip_none_for_toml(v) for k, v in m.items() if v is not None}
    if isinstance(value, (list, tuple)):
        seq: list[object] = list(cast("list[object]", value))
        return [_strip_none_for_toml(v) for v in seq if v is not None]
    return value


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string, omitting `None` values."""
    cleaned: Any = _strip_none_for_toml(toml_dict)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))


# --- Checked getters ---


def _warn(diagnostics: DiagnosticLog, section: str, key: str, message: str) -> None:
    context = f"[{section}].{key}"
    logger.warning("%s: %s", context, message)
    diagnostics.add_warning(message, context)


def get_table_checked(
    data: TomlTable, section: str, diagnostics: DiagnosticLog
) -> TomlTable:
    """Return the sub-table ``section`` of ``data`` (empty if absent or not a table)."""
    value: Any = data.get(section)
    if value is None:
        return {}
    if not isinstance(value, dict):
        message = f"expected a table, got {type(value).__name__}; ignored"
        logger.warning("[%s]: %s", section, message)
        diagnostics.add_warning(message, f"[{section}]")
        return {}
    return cast("TomlTable", value)


def get_int_checked(
    table: TomlTable, section: str, key: str, diagnostics: DiagnosticLog
) -> int | None:
    """Return an integer value, or None when absent or malformed."""
    value: Any = table.get(key)
    if value is None:
        return None
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        _warn(diagnostics, section, key, f"expected an integer, got {value!r}; ignored")
        return None
    return int(value)


def get_bool_checked(
    table: TomlTable, section: str, key: str, diagnostics: DiagnosticLog
) -> bool | None:
    """Return a boolean value, or None when absent or malformed."""
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        _warn(diagnostics, section, key, f"expected a boolean, got {value!r}; ignored")
        return None
    return value


def get_string_checked(
    table: TomlTable, section: str, key: str, diagnostics: DiagnosticLog
) -> str | None:
    """Return a string value, or None when absent or malformed."""
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        _warn(diagnostics, section, key, f"expected a string, got {value!r}; ignored")
        return None
    return value


def get_string_list_checked(
    table: TomlTable, section: str, key: str, diagnostics: DiagnosticLog
) -> list[str] | None:
    """Return a list of strings, or None when absent or not a list.

    Non-string items are dropped with a warning; the remaining items are kept.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        _warn(diagnostics, section, key, f"expected an array of strings, got {value!r}; ignored")
        return None
    items: list[str] = []
    for item in cast("list[object]", value):
        if isinstance(item, str):
            items.append(item)
        else:
            _warn(diagnostics, section, key, f"ignoring non-string item {item!r}")
    return items


def check_unknown_keys(data: TomlTable, diagnostics: DiagnosticLog) -> None:
    """Record a warning for every unknown section or key in ``data``."""
    for section, value in data.items():
        if section not in Toml.ALLOWED:
            message = "unknown section; ignored"
            logger.warning("[%s]: %s", section, message)
            diagnostics.add_warning(message, f"[{section}]")
            continue
        allowed: frozenset[str] | None = Toml.ALLOWED[section]
        if allowed is None or not isinstance(value, dict):
            continue
        for key in cast("TomlTable", value):
            if key not in allowed:
                _warn(diagnostics, section, key, "unknown key; ignored")
