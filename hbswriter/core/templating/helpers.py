# hbswriter/core/templating/helpers.py
"""
Loads helper functions from Python files in a helpers directory.

A helper file exposes either a callable named `helper`, registered under the
file's derived name, or a mapping named `helpers` whose entries are all
registered. Files exposing neither are skipped.
"""
import importlib.util
import re
import sys
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict
import structlog

from hbswriter.exceptions import ConfigError

log = structlog.get_logger(__name__)

def _module_name_for(file_path: Path) -> str:
    slug = re.sub(r"\W", "_", file_path.with_suffix("").as_posix().strip("/"))
    return f"hbswriter_helpers.{slug}"

def import_helper_file(file_path: Path) -> ModuleType:
    # imports the file afresh on every call so edits between write cycles are picked up.
    module_name = _module_name_for(file_path)
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"cannot import helper file {file_path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise ConfigError(f"failed to import helper file {file_path}: {e}") from e
    return module

def helpers_from_module(module: ModuleType, name: str) -> Dict[str, Callable[..., Any]]:
    exported = getattr(module, "helper", None)
    if callable(exported):
        return {name: exported}
    exported = getattr(module, "helpers", None)
    if isinstance(exported, Mapping):
        return dict(exported)
    log.debug("helper_file_without_exports_skipped", module=module.__name__)
    return {}
