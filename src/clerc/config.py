"""Configuration loading and Pydantic models for clerc.

The effective configuration is built in three steps, each a pure function:
defaults, then the JSON config file, then command-line overrides.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from clerc.errors import ConfigParseError
from clerc.output import trace

CONFIG_FILENAME = ".clerc"
DEFAULT_SERVER_URL = "http://127.0.0.1:8098"


class ClercConfig(BaseModel):
    """Resolved runtime configuration. Read-only once built."""

    model_config = ConfigDict(frozen=True)

    server_url: str = DEFAULT_SERVER_URL
    verbose: bool = False
    show_objects: bool = False


class FileConfig(BaseModel):
    """On-disk schema of ``~/.clerc``. Every field is optional."""

    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    verbose: bool | None = None
    show: bool | None = None


# A file holding just `null` is valid JSON and leaves every value unset.
_FILE_CONFIG = TypeAdapter(FileConfig | None)


class CliOverrides(BaseModel):
    """Values taken from the command line."""

    url: str | None = None
    verbose: bool = False
    show: bool = False


def default_config_path() -> Path:
    """Return ``<home>/.clerc`` for the current user."""
    return Path.home() / CONFIG_FILENAME


def merge_file_config(config: ClercConfig, file_config: FileConfig) -> ClercConfig:
    """Overlay the fields present in *file_config* onto *config*."""
    updates = {}
    if file_config.url is not None:
        updates["server_url"] = file_config.url
    if file_config.verbose is not None:
        updates["verbose"] = file_config.verbose
    if file_config.show is not None:
        updates["show_objects"] = file_config.show
    return config.model_copy(update=updates)


def apply_overrides(config: ClercConfig, overrides: CliOverrides) -> ClercConfig:
    """Apply command-line overrides; flags can only switch options on."""
    updates = {}
    if overrides.verbose:
        updates["verbose"] = True
    if overrides.show:
        updates["show_objects"] = True
    if overrides.url is not None:
        updates["server_url"] = overrides.url
    return config.model_copy(update=updates)


def read_config_file(path: Path, config: ClercConfig) -> ClercConfig:
    """Merge the config file at *path* into *config*.

    A missing or unreadable file leaves *config* unchanged. Traces are
    checked against the configuration as built so far, so the file's own
    ``verbose`` setting decides whether its contents are echoed.

    Args:
        path: Location of the JSON config file.
        config: Configuration to merge into.

    Returns:
        The merged configuration.

    Raises:
        ConfigParseError: If the file is not a valid JSON configuration.
    """
    try:
        raw = path.read_bytes()
    except OSError:
        trace(config, "unable to read file :(")
        return config

    try:
        file_config = _FILE_CONFIG.validate_json(raw)
    except ValidationError as exc:
        raise ConfigParseError(str(path), _first_error(exc)) from exc
    if file_config is None:
        file_config = FileConfig()

    config = merge_file_config(config, file_config)
    trace(config, "config: " + raw.decode("utf-8", errors="replace"))
    return config


def resolve_config(overrides: CliOverrides, path: Path | None = None) -> ClercConfig:
    """Build the effective configuration (default < file < CLI).

    Args:
        overrides: Command-line values.
        path: Config file location. Defaults to ``~/.clerc``.

    Returns:
        The resolved, immutable configuration.
    """
    if path is None:
        path = default_config_path()
    config = read_config_file(path, ClercConfig())
    return apply_overrides(config, overrides)


def _first_error(exc: ValidationError) -> str:
    """Condense a pydantic ValidationError into a one-line message."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{loc}: {first['msg']}" if loc else first["msg"]
