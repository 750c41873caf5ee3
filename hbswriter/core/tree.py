# hbswriter/core/tree.py
import inspect
import os
from pathlib import Path
from typing import Any
import structlog

from hbswriter.exceptions import DiscoveryError

log = structlog.get_logger(__name__)

async def resolve_path_tree(tree: Any) -> Path:
    """
    Default tree resolver: a tree is a directory path, or a zero-argument
    callable returning one (directly or as an awaitable).
    """
    if callable(tree) and not isinstance(tree, (str, os.PathLike)):
        tree = tree()
    if inspect.isawaitable(tree):
        tree = await tree
    if not isinstance(tree, (str, os.PathLike)):
        raise DiscoveryError(f"cannot resolve input tree of type {type(tree).__name__}")
    source_dir = Path(tree).resolve()
    if not source_dir.is_dir():
        raise DiscoveryError(f"input tree is not a directory: {source_dir}")
    log.debug("input_tree_resolved", source_dir=str(source_dir))
    return source_dir
