"""
TOML configuration for sheet-beautify.

Settings are read from, lowest precedence first:

* built-in defaults (the section dataclasses below)
* the user file, ~/.config/sheet-beautify/config.toml
* the nearest .sheet-beautify.toml or sheet-beautify.toml at or above the
  working directory, searching no higher than the enclosing git checkout

Command-line options override all of them.
"""

import sys
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .exceptions import ConfigurationError

# Config file names to search for in project directories
CONFIG_FILENAMES = [".sheet-beautify.toml", "sheet-beautify.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "sheet-beautify" / "config.toml"

# Beautify phases in the order they run
PHASES = ("single_port", "scale_align", "multi_port")

DISPLAY_MODES = ("none", "console")


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    verbose: bool = False
    quiet: bool = False


@dataclass
class SheetConfig:
    """Sheet geometry limits."""

    max_coord: float = 4000.0


@dataclass
class RouterConfig:
    """Reference router settings."""

    nub_length: float = 8.0
    separation: float = 6.0


@dataclass
class BeautifyConfig:
    """Which beautify phases run and how edits are accepted."""

    phases: list[str] = field(default_factory=lambda: list(PHASES))
    reject_out_of_bounds: bool = True


@dataclass
class TestingConfig:
    """Generative test runner settings."""

    __test__ = False

    seed: int = 0
    session_file: str = ".sheet-beautify-session.json"
    display: str = "console"


# All known config keys for validation, derived from the section dataclasses
SECTIONS = {
    "defaults": DefaultsConfig,
    "sheet": SheetConfig,
    "router": RouterConfig,
    "beautify": BeautifyConfig,
    "testing": TestingConfig,
}

KNOWN_KEYS = {name: {f.name for f in fields(cls)} for name, cls in SECTIONS.items()}


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    sheet: SheetConfig = field(default_factory=SheetConfig)
    router: RouterConfig = field(default_factory=RouterConfig)
    beautify: BeautifyConfig = field(default_factory=BeautifyConfig)
    testing: TestingConfig = field(default_factory=TestingConfig)

    # Track which file each setting came from (for `config --show`)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Build the effective configuration for *start_dir* (default: cwd).

        Raises:
            ConfigurationError: If a file can't be read or holds invalid values
        """
        config = cls()
        for path in _config_files(start_dir or Path.cwd()):
            _apply_file(config, path)
        _validate(config)
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")

    def items(self) -> list[tuple[str, Any]]:
        """Flattened ``section.key`` / value pairs."""
        result = []
        for section in SECTIONS:
            values = getattr(self, section)
            for f in fields(values):
                result.append((f"{section}.{f.name}", getattr(values, f.name)))
        return result


def _config_files(start_dir: Path) -> list[Path]:
    """Existing config files in the order they are applied."""
    found = [USER_CONFIG_PATH] if USER_CONFIG_PATH.is_file() else []
    project = _find_project_config(start_dir)
    if project is not None:
        found.append(project)
    return found


def _find_project_config(start_dir: Path) -> Path | None:
    """Nearest project config file, searching upward to the git root."""
    for directory in (start_dir.resolve(), *start_dir.resolve().parents):
        candidates = [directory / name for name in CONFIG_FILENAMES]
        match = next((c for c in candidates if c.is_file()), None)
        if match is not None:
            return match
        if (directory / ".git").exists():
            return None
    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Parse *path*, raising ConfigurationError instead of TOML or OS errors."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}",
            context={"file": str(path), "error": str(e)},
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {path}",
            context={"file": str(path), "error": str(e)},
        ) from e


def _apply_file(config: Config, path: Path) -> None:
    """Overlay the values in *path* onto *config*, recording their source."""
    source = str(path)
    data = _load_toml_file(path)
    for section, values in data.items():
        if section not in SECTIONS:
            warnings.warn(f"Unknown config section '{section}' in {source}", stacklevel=4)
            continue
        if not isinstance(values, dict):
            raise ConfigurationError(
                f"Config section [{section}] must be a table",
                context={"file": source, "value": values},
            )
        target = getattr(config, section)
        for key, value in values.items():
            if key not in KNOWN_KEYS[section]:
                warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)
                continue
            setattr(target, key, value)
            config._sources[f"{section}.{key}"] = source



def _validate(config: Config) -> None:
    unknown = [p for p in config.beautify.phases if p not in PHASES]
    if unknown:
        raise ConfigurationError(
            "Unknown beautify phase",
            context={"phases": unknown, "available": list(PHASES)},
            suggestions=["Use one of the available phase names"],
        )
    if config.testing.display not in DISPLAY_MODES:
        raise ConfigurationError(
            f"Unknown display mode '{config.testing.display}'",
            context={"available": list(DISPLAY_MODES)},
        )
    if config.sheet.max_coord <= 0:
        raise ConfigurationError(
            "sheet.max_coord must be positive",
            context={"max_coord": config.sheet.max_coord},
        )


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# sheet-beautify configuration file
# Place as .sheet-beautify.toml in project root or ~/.config/sheet-beautify/config.toml for user defaults

[defaults]
# Enable verbose output by default
# verbose = false

# Enable quiet mode by default
# quiet = false

[sheet]
# Largest X or Y coordinate a symbol may occupy
# max_coord = 4000.0

[router]
# Length of the stub leaving and entering each port
# nub_length = 8.0

# Spacing between overlapping wire segments of different nets
# separation = 6.0

[beautify]
# Phases to run, in order: single_port, scale_align, multi_port
# phases = ["single_port", "scale_align", "multi_port"]

# Roll back edits that move a symbol off the sheet
# reject_out_of_bounds = true

[testing]
# Seed for shuffled test generators
# seed = 0

# Where the last failing test position is stored
# session_file = ".sheet-beautify-session.json"

# How failing samples are shown: none, console
# display = "console"
"""


def get_config_paths() -> dict[str, Path | None]:
    """The user and project config files `Config.load()` would read."""
    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.is_file() else None,
        "project": _find_project_config(Path.cwd()),
    }

