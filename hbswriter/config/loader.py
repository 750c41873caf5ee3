# hbswriter/config/loader.py
"""
Handles loading project configuration and template data files.
"""
import json
import toml
from pathlib import Path
from typing import Dict, Any, Iterable, Optional
import structlog

from hbswriter.exceptions import ConfigError

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = ["hbswriter.toml", ".hbswriter.toml", "pyproject.toml"]

KNOWN_CONFIG_KEYS = {
    "source",
    "destination",
    "files",
    "partials",
    "helpers",
    "context",
    "data_files",
    "extension",
    "preserve_leading_separator",
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
        return data.get("tool", {}).get("hbswriter", {}) if file_path.name == "pyproject.toml" else data
    except Exception as e: log.error("config_file_load_error", path=str(file_path), error=str(e)); return {}

def load_project_config(project_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Returns the settings of the first project config file found in `project_dir` (default: cwd)."""
    base = project_dir or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base / filename
        if not candidate.is_file():
            continue
        settings = _load_toml_file_data(candidate)
        if not settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        unknown = set(settings) - KNOWN_CONFIG_KEYS
        if unknown:
            log.warning("unknown_config_keys_ignored", path=str(candidate), keys=sorted(unknown))
        if "context" in settings and not isinstance(settings["context"], dict):
            raise ConfigError(f"'context' in {candidate} must be a table")
        if "data_files" in settings and not isinstance(settings["data_files"], list):
            raise ConfigError(f"'data_files' in {candidate} must be a list of paths")
        return {k: v for k, v in settings.items() if k in KNOWN_CONFIG_KEYS}
    log.debug("no_configuration_files_loaded")
    return {}

def load_data_file(file_path: Path) -> Dict[str, Any]:
    # reads a JSON or TOML file whose top-level table becomes template context.
    suffix = file_path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(file_path.read_text(encoding="utf-8"))
        elif suffix == ".toml":
            data = toml.load(file_path)
        else:
            raise ConfigError(f"unsupported data file type '{file_path.suffix}' for {file_path} (use .json or .toml)")
    except (OSError, ValueError, toml.TomlDecodeError) as e:
        raise ConfigError(f"failed to read data file {file_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"data file {file_path} must contain a table/object at the top level")
    log.debug("data_file_loaded", path=str(file_path), keys=list(data.keys()))
    return data

def merge_context(data_files: Iterable[Path], inline: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    # later data files win; inline values win over every file.
    context: Dict[str, Any] = {}
    for data_file in data_files:
        context.update(load_data_file(Path(data_file)))
    if inline:
        context.update(inline)
    return context
