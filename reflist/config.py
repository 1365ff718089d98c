"""
Listing options and configuration file handling.

ListOptions is the explicit value object that drives one listing. Config
holds the installation locations and display settings read from YAML (or
JSON) files, merged from multiple sources (custom → project → user → system
→ defaults).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .common import vlog
from .refs import Kind, Scope


DEFAULT_COMMIT_LENGTH = 12
MAX_COMMIT_LENGTH = 64

# Configuration file locations (in priority order)
CONFIG_LOCATIONS = [
    ".reflist.yml",
    ".reflist.yaml",
    os.path.expanduser("~/.config/reflist/config.yml"),
    os.path.expanduser("~/.config/reflist/config.yaml"),
    "/etc/reflist/config.yml",
    "/etc/reflist/config.yaml",
]

SYSTEM_INSTALLATION_DIR = "/var/lib/xdg-app"


def default_user_dir() -> str:
    """Per-user installation directory ($XDG_DATA_HOME/xdg-app)."""
    data_home = os.environ.get("XDG_DATA_HOME") or os.path.expanduser("~/.local/share")
    return os.path.join(data_home, "xdg-app")


def _validate_commit_length(value: int) -> None:
    if not isinstance(value, int) or value < 1 or value > MAX_COMMIT_LENGTH:
        raise ValueError(
            f"Invalid commit_length: {value}. "
            f"Must be between 1 and {MAX_COMMIT_LENGTH}"
        )


@dataclass(frozen=True)
class ListOptions:
    """
    Options for a single listing.

    Attributes:
        kinds: Reference kinds to list
        scopes: Installation scopes to query
        show_details: Detailed mode (one row per ref with commits and tags)
        commit_length: Display length of commit identifiers
    """
    kinds: frozenset[Kind] = frozenset({Kind.APP, Kind.RUNTIME})
    scopes: frozenset[Scope] = frozenset({Scope.USER, Scope.SYSTEM})
    show_details: bool = False
    commit_length: int = DEFAULT_COMMIT_LENGTH

    def __post_init__(self):
        if not self.kinds:
            raise ValueError("At least one kind (app or runtime) must be listed")
        if not self.scopes:
            raise ValueError("At least one scope (user or system) must be queried")
        _validate_commit_length(self.commit_length)

    @staticmethod
    def from_flags(
        user: bool = False,
        system: bool = False,
        app: bool = False,
        runtime: bool = False,
        show_details: bool = False,
        commit_length: int = DEFAULT_COMMIT_LENGTH,
    ) -> ListOptions:
        """Resolve command-line flags; an unset pair means both."""
        kinds = set()
        if app or not runtime:
            kinds.add(Kind.APP)
        if runtime or not app:
            kinds.add(Kind.RUNTIME)

        scopes = set()
        if user or not system:
            scopes.add(Scope.USER)
        if system or not user:
            scopes.add(Scope.SYSTEM)

        return ListOptions(
            kinds=frozenset(kinds),
            scopes=frozenset(scopes),
            show_details=show_details,
            commit_length=commit_length,
        )

    @property
    def both_scopes(self) -> bool:
        return Scope.USER in self.scopes and Scope.SYSTEM in self.scopes

    @property
    def include_apps(self) -> bool:
        return Kind.APP in self.kinds


@dataclass(frozen=True)
class Config:
    """
    Configuration loaded from files.

    Attributes:
        version: Config schema version
        user_dir: Per-user installation directory (None = default)
        system_dir: System-wide installation directory (None = default)
        commit_length: Display length of commit identifiers
        source: Path to the configuration file that was loaded
    """
    version: int = 1
    user_dir: str | None = None
    system_dir: str | None = None
    commit_length: int = DEFAULT_COMMIT_LENGTH
    source: str = ""

    def __post_init__(self):
        if self.version != 1:
            raise ValueError(f"Unsupported config version: {self.version}. Expected version 1")
        _validate_commit_length(self.commit_length)

    @staticmethod
    def from_dict(data: dict[str, Any], source: str = "") -> Config:
        """Create Config from dictionary."""
        installations = data.get("installations") or {}
        display = data.get("display") or {}

        user_dir = installations.get("user")
        system_dir = installations.get("system")

        return Config(
            version=data.get("version", 1),
            user_dir=os.path.expanduser(user_dir) if user_dir else None,
            system_dir=os.path.expanduser(system_dir) if system_dir else None,
            commit_length=display.get("commit_length", DEFAULT_COMMIT_LENGTH),
            source=source,
        )

    def merge_with(self, other: Config) -> Config:
        """
        Merge this config with another, preferring values from this config.

        Args:
            other: Other config to merge (lower priority)

        Returns:
            New merged Config object
        """
        return Config(
            version=self.version,
            user_dir=self.user_dir or other.user_dir,
            system_dir=self.system_dir or other.system_dir,
            commit_length=(
                self.commit_length
                if self.commit_length != DEFAULT_COMMIT_LENGTH
                else other.commit_length
            ),
            source=self.source or other.source,
        )

    def installation_dir(self, scope: Scope) -> str:
        """
        Resolve the installation directory for a scope.

        Environment variables REFLIST_USER_DIR / REFLIST_SYSTEM_DIR take
        precedence over configured values, which take precedence over
        the built-in defaults.
        """
        if scope is Scope.USER:
            return os.environ.get("REFLIST_USER_DIR") or self.user_dir or default_user_dir()
        return os.environ.get("REFLIST_SYSTEM_DIR") or self.system_dir or SYSTEM_INSTALLATION_DIR


def _load_yaml(file_path: str) -> dict[str, Any] | None:
    """
    Load YAML configuration file.

    Returns:
        Parsed configuration dictionary, or None if file unreadable or invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return None


def _load_json(file_path: str) -> dict[str, Any] | None:
    """
    Load JSON configuration file.

    Returns:
        Parsed configuration dictionary, or None if file unreadable or invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, json.JSONDecodeError):
        return None


def load_config_file(file_path: str, verbose: bool = False) -> Config | None:
    """
    Load configuration from a single file.

    Files ending in .json are parsed as JSON, everything else as YAML.

    Args:
        file_path: Path to configuration file
        verbose: Enable verbose logging

    Returns:
        Config object, or None if file cannot be loaded
    """
    if not os.path.exists(file_path):
        return None

    vlog(f"Loading config from: {file_path}", verbose)

    if Path(file_path).suffix == ".json":
        data = _load_json(file_path)
    else:
        data = _load_yaml(file_path)

    if data is None:
        vlog(f"Invalid config file: {file_path}", verbose)
        return None

    try:
        config = Config.from_dict(data, source=file_path)
        vlog(f"Loaded config successfully: {file_path}", verbose)
        return config
    except (ValueError, TypeError, AttributeError) as e:
        vlog(f"Config validation failed for {file_path}: {e}", verbose)
        return None


def load_config(
    custom_path: str | None = None,
    verbose: bool = False,
) -> Config:
    """
    Load and merge configuration from all sources.

    Configuration precedence (highest to lowest):
    1. Custom path (if provided)
    2. Project .reflist.yml
    3. User ~/.config/reflist/config.yml
    4. System /etc/reflist/config.yml
    5. Default configuration

    Args:
        custom_path: Optional path to custom configuration file
        verbose: Enable verbose logging

    Returns:
        Merged Config object (never None, returns defaults if no config found)

    Raises:
        ValueError: If custom_path is provided but file cannot be loaded
    """
    configs: list[Config] = []

    if custom_path:
        config = load_config_file(custom_path, verbose)
        if config is None:
            raise ValueError(f"Could not load config from specified path: {custom_path}")
        configs.append(config)

    for location in CONFIG_LOCATIONS:
        config = load_config_file(location, verbose)
        if config is not None:
            configs.append(config)

    if not configs:
        vlog("No config files found, using defaults", verbose)
        return Config()

    merged = configs[0]
    for config in configs[1:]:
        merged = merged.merge_with(config)

    vlog(f"Merged {len(configs)} config files", verbose)
    return merged
