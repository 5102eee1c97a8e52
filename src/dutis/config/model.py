# topmark:header:start
#
#   project      : Dutis
#   file         : model.py
#   file_relpath : src/dutis/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot handed to the engine and CLI.
    - `MutableConfig`: a mutable builder used while loading and merging
      layers; it is frozen into `Config` once all layers are applied.

Layers, lowest to highest precedence:
    1. built-in defaults (no I/O);
    2. the user config (``$XDG_CONFIG_HOME/dutis/dutis.toml`` or ``~/.dutis.toml``);
    3. ``dutis.toml`` in the working directory;
    4. explicit ``--config`` files, in the order given;
    5. CLI overrides (`MutableConfig.apply_cli_args`).

Scalar fields of `MutableConfig` are tri-state: ``None`` means "not set by
this layer" so merging never lets an absent key clobber a lower layer.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dutis.config.io import (
    check_unknown_keys,
    get_bool_checked,
    get_int_checked,
    get_string_checked,
    get_string_list_checked,
    get_table_checked,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
)
from dutis.config.keys import Toml
from dutis.config.logging import get_logger
from dutis.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_APPLICATION_DIRS,
    DEFAULT_ASSIGN_ATTEMPTS,
    DEFAULT_DELAY_MS,
    DEFAULT_QUERY_ATTEMPTS,
    DEFAULT_ROLE,
    LEGACY_USER_CONFIG_NAME,
    USER_CONFIG_DIR_NAME,
)
from dutis.core.diagnostics import Diagnostic, DiagnosticLog
from dutis.core.errors import EmptyInputError
from dutis.core.types import Suffix, normalize_suffix
from dutis.platform.base import LSRole

if TYPE_CHECKING:
    from dutis.config.io import TomlTable
    from dutis.config.logging import DutisLogger

# ArgsLike: generic mapping accepted by `apply_cli_args` (CLI namespaces and plain dicts).
ArgsLike = Mapping[str, Any]

logger: DutisLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration for Dutis.

    Attributes:
        query_attempts (int): Registry reads per handler query.
        assign_attempts (int): Registry writes per assignment.
        delay_ms (int): Milliseconds between consecutive attempts.
        role (LSRole): LaunchServices role for reads and writes.
        probe_fallback (bool): Whether the slow probing tier may run.
        application_dirs (tuple[str, ...]): Directories scanned for ``.app`` bundles.
        groups (Mapping[str, tuple[Suffix, ...]]): Named suffix groups.
        config_files (tuple[str, ...]): Config files that contributed, in merge order.
        verbosity_level (int | None): None = inherit, 0 = terse, >0 = verbose.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading.
    """

    query_attempts: int
    assign_attempts: int
    delay_ms: int
    role: LSRole
    probe_fallback: bool
    application_dirs: tuple[str, ...]
    groups: Mapping[str, tuple[Suffix, ...]]
    config_files: tuple[str, ...]
    verbosity_level: int | None
    diagnostics: tuple[Diagnostic, ...]

    @property
    def role_name(self) -> str:
        """Config-friendly name of `role` (e.g. ``"all"``)."""
        return (self.role.name or str(int(self.role))).lower()

    def to_toml_dict(self) -> TomlTable:
        """Convert this Config into a TOML-serializable dict (export only)."""
        return {
            Toml.SECTION_CONVERGENCE: {
                Toml.KEY_QUERY_ATTEMPTS: self.query_attempts,
                Toml.KEY_ASSIGN_ATTEMPTS: self.assign_attempts,
                Toml.KEY_DELAY_MS: self.delay_ms,
            },
            Toml.SECTION_HANDLERS: {
                Toml.KEY_ROLE: self.role_name,
                Toml.KEY_PROBE_FALLBACK: self.probe_fallback,
            },
            Toml.SECTION_APPLICATIONS: {
                Toml.KEY_SEARCH_DIRS: list(self.application_dirs),
            },
            Toml.SECTION_GROUPS: {name: list(sfx) for name, sfx in sorted(self.groups.items())},
        }

    def to_toml(self) -> str:
        """Render this Config as a TOML document."""
        return to_toml(self.to_toml_dict())

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            query_attempts=self.query_attempts,
            assign_attempts=self.assign_attempts,
            delay_ms=self.delay_ms,
            role=self.role_name,
            probe_fallback=self.probe_fallback,
            application_dirs=list(self.application_dirs),
            groups={k: list(v) for k, v in self.groups.items()},
            config_files=list(self.config_files),
            verbosity_level=self.verbosity_level,
            diagnostics=DiagnosticLog(items=list(self.diagnostics)),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used while loading and merging layers.

    Attributes mirror `Config`; scalars are ``None`` when unset and ``role`` is
    kept as its raw config string until `freeze` validates it.
    """

    query_attempts: int | None = None
    assign_attempts: int | None = None
    delay_ms: int | None = None
    role: str | None = None
    probe_fallback: bool | None = None
    application_dirs: list[str] | None = None
    groups: dict[str, list[Suffix]] = field(default_factory=lambda: {})
    config_files: list[str] = field(default_factory=lambda: [])
    verbosity_level: int | None = None
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Validate this builder and return an immutable `Config`.

        Unset values fall back to the built-in defaults.

        Raises:
            ValueError: If an attempt count is below 1, the delay is negative,
                or the role is unknown.
        """
        query_attempts: int = _pick(self.query_attempts, DEFAULT_QUERY_ATTEMPTS)
        assign_attempts: int = _pick(self.assign_attempts, DEFAULT_ASSIGN_ATTEMPTS)
        delay_ms: int = _pick(self.delay_ms, DEFAULT_DELAY_MS)

        if query_attempts < 1:
            raise ValueError(f"{Toml.KEY_QUERY_ATTEMPTS} must be at least 1 (got {query_attempts})")
        if assign_attempts < 1:
            raise ValueError(
                f"{Toml.KEY_ASSIGN_ATTEMPTS} must be at least 1 (got {assign_attempts})"
            )
        if delay_ms < 0:
            raise ValueError(f"{Toml.KEY_DELAY_MS} must not be negative (got {delay_ms})")

        role = LSRole.parse(self.role or DEFAULT_ROLE)
        app_dirs: list[str] = _pick(self.application_dirs, list(DEFAULT_APPLICATION_DIRS))

        return Config(
            query_attempts=query_attempts,
            assign_attempts=assign_attempts,
            delay_ms=delay_ms,
            role=role,
            probe_fallback=bool(self.probe_fallback),
            application_dirs=tuple(app_dirs or ()),
            groups={name: tuple(sfx) for name, sfx in self.groups.items()},
            config_files=tuple(self.config_files),
            verbosity_level=self.verbosity_level,
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the built-in defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Unknown sections and keys, and values of the wrong type, are recorded
        as WARNING diagnostics and otherwise ignored.

        Args:
            data (TomlTable): Parsed TOML data.
            config_file (Path | None): The file the data came from, if any.

        Returns:
            MutableConfig: The resulting draft.
        """
        draft = cls()
        diags = draft.diagnostics
        if config_file is not None:
            draft.config_files.append(str(config_file))

        check_unknown_keys(data, diags)

        convergence_tbl = get_table_checked(data, Toml.SECTION_CONVERGENCE, diags)
        logger.trace("TOML [convergence]: %s", convergence_tbl)
        draft.query_attempts = get_int_checked(
            convergence_tbl, Toml.SECTION_CONVERGENCE, Toml.KEY_QUERY_ATTEMPTS, diags
        )
        draft.assign_attempts = get_int_checked(
            convergence_tbl, Toml.SECTION_CONVERGENCE, Toml.KEY_ASSIGN_ATTEMPTS, diags
        )
        draft.delay_ms = get_int_checked(
            convergence_tbl, Toml.SECTION_CONVERGENCE, Toml.KEY_DELAY_MS, diags
        )

        handlers_tbl = get_table_checked(data, Toml.SECTION_HANDLERS, diags)
        logger.trace("TOML [handlers]: %s", handlers_tbl)
        draft.role = get_string_checked(handlers_tbl, Toml.SECTION_HANDLERS, Toml.KEY_ROLE, diags)
        draft.probe_fallback = get_bool_checked(
            handlers_tbl, Toml.SECTION_HANDLERS, Toml.KEY_PROBE_FALLBACK, diags
        )

        apps_tbl = get_table_checked(data, Toml.SECTION_APPLICATIONS, diags)
        logger.trace("TOML [applications]: %s", apps_tbl)
        draft.application_dirs = get_string_list_checked(
            apps_tbl, Toml.SECTION_APPLICATIONS, Toml.KEY_SEARCH_DIRS, diags
        )

        groups_tbl = get_table_checked(data, Toml.SECTION_GROUPS, diags)
        logger.trace("TOML [groups]: %s", groups_tbl)
        for name in groups_tbl:
            raw = get_string_list_checked(groups_tbl, Toml.SECTION_GROUPS, name, diags)
            if raw is None:
                continue
            draft.groups[str(name)] = _normalize_group(str(name), raw, diags)

        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load a draft from a single TOML file.

        Returns:
            MutableConfig | None: The draft, or None if the file was empty or unreadable.
        """
        data: TomlTable = load_toml_dict(path)
        if not data:
            logger.debug("No configuration read from %s", path)
            return None
        logger.debug("Loaded configuration from %s", path)
        return cls.from_toml_dict(data, config_file=path)

    @classmethod
    def discover_user_config_file(cls) -> Path | None:
        """Return a user-scoped config path if it exists.

        Looks under XDG config (``$XDG_CONFIG_HOME/dutis/dutis.toml``) and the
        legacy fallback (``~/.dutis.toml``). The first existing path is returned.
        """
        xdg: str | None = os.environ.get("XDG_CONFIG_HOME")
        base: Path = Path(xdg) if xdg else Path.home() / ".config"
        xdg_path: Path = base / USER_CONFIG_DIR_NAME / CONFIG_FILE_NAME
        legacy: Path = Path.home() / LEGACY_USER_CONFIG_NAME
        for p in (xdg_path, legacy):
            if p.is_file():
                return p
        return None

    @classmethod
    def load_merged(
        cls,
        *,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
        cwd: Path | None = None,
    ) -> MutableConfig:
        """Load and merge every configuration layer into a draft.

        Args:
            extra_config_files (Iterable[Path] | None): Explicit files merged last,
                in the order given.
            no_config (bool): Skip the user and working-directory layers.
            cwd (Path | None): Directory searched for ``dutis.toml`` (defaults to CWD).

        Returns:
            MutableConfig: The merged draft, ready for CLI overrides and `freeze`.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            user_cfg_path: Path | None = cls.discover_user_config_file()
            if user_cfg_path is not None:
                user_cfg = cls.from_toml_file(user_cfg_path)
                if user_cfg is not None:
                    draft = draft.merge_with(user_cfg)

            local_path: Path = (cwd or Path.cwd()) / CONFIG_FILE_NAME
            if local_path.is_file():
                local_cfg = cls.from_toml_file(local_path)
                if local_cfg is not None:
                    draft = draft.merge_with(local_cfg)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Groups merge key-wise: a group defined in ``other`` replaces the group
        of the same name; other groups are kept.
        """
        diagnostics = DiagnosticLog(items=list(self.diagnostics))
        diagnostics.extend(other.diagnostics)
        return MutableConfig(
            query_attempts=_pick(other.query_attempts, self.query_attempts),
            assign_attempts=_pick(other.assign_attempts, self.assign_attempts),
            delay_ms=_pick(other.delay_ms, self.delay_ms),
            role=_pick(other.role, self.role),
            probe_fallback=_pick(other.probe_fallback, self.probe_fallback),
            application_dirs=_pick(other.application_dirs, self.application_dirs),
            groups={**self.groups, **other.groups},
            config_files=self.config_files + other.config_files,
            verbosity_level=_pick(other.verbosity_level, self.verbosity_level),
            diagnostics=diagnostics,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from a parsed arguments mapping (CLI or API).

        Recognized keys: ``verbosity_level``, ``role``, ``probe_fallback``,
        ``query_attempts``, ``assign_attempts``, ``delay_ms``. Keys that are
        absent or ``None`` leave the draft unchanged. Config discovery flags
        (``--config``, ``--no-config``) are handled by `load_merged`.
        """
        for key in (
            "verbosity_level",
            "role",
            "probe_fallback",
            "query_attempts",
            "assign_attempts",
            "delay_ms",
        ):
            value = args.get(key)
            if value is not None:
                setattr(self, key, value)
        return self


def _pick(override: Any, base: Any) -> Any:
    return override if override is not None else base


def _normalize_group(name: str, raw: list[str], diagnostics: DiagnosticLog) -> list[Suffix]:
    suffixes: list[Suffix] = []
    for item in raw:
        try:
            sfx = normalize_suffix(item)
        except EmptyInputError:
            diagnostics.add_warning("ignoring empty suffix", f"[{Toml.SECTION_GROUPS}].{name}")
            continue
        if sfx not in suffixes:
            suffixes.append(sfx)
    return suffixes
