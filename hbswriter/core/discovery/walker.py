# hbswriter/core/discovery/walker.py
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional
import structlog

from hbswriter.exceptions import DiscoveryError

log = structlog.get_logger(__name__)

def iter_relative_files(root: Path, follow_symlinks: bool = False) -> Iterator[str]:
    # yields every file under root as a posix path relative to root, in sorted walk order.
    for current, dirs, files in os.walk(str(root), topdown=True, followlinks=follow_symlinks):
        dirs.sort()
        for file_name in sorted(files):
            yield Path(current, file_name).relative_to(root).as_posix()

def walk_files(root: Path, extensions: Optional[Iterable[str]] = None) -> List[str]:
    """
    Recursively lists files under `root` whose names end with one of `extensions`.

    Returns posix paths relative to `root` in a stable walk order, so the same directory
    snapshot always yields the same list.
    """
    if not root.is_dir():
        raise DiscoveryError(f"directory not found: {root}")
    suffixes = tuple(extensions) if extensions else ()
    found = [
        rel_path for rel_path in iter_relative_files(root)
        if not suffixes or rel_path.endswith(suffixes)
    ]
    log.debug("walked_directory", root=str(root), extensions=list(suffixes), count=len(found))
    return found
