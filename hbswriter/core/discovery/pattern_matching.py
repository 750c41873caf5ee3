# hbswriter/core/discovery/pattern_matching.py
from pathlib import Path
from typing import List, Optional, Sequence, Union
import pathspec
import structlog

from hbswriter.core.discovery.walker import iter_relative_files
from hbswriter.exceptions import DiscoveryError

log = structlog.get_logger(__name__)

def compile_glob_patterns_to_spec(glob_patterns: List[str]) -> Optional[pathspec.GitIgnoreSpec]:
    # compiles a list of glob patterns into a pathspec object for matching.
    if not glob_patterns:
        return None
    try:
        return pathspec.GitIgnoreSpec.from_lines(glob_patterns)
    except Exception as e:
        raise DiscoveryError(f"error compiling glob patterns {glob_patterns}: {e}")

def multi_glob(patterns: Union[str, Sequence[str]], cwd: Path) -> List[str]:
    """
    Expands each pattern against the files under `cwd`.

    Results keep pattern order, are sorted within a pattern and contain each
    path once. A pattern that matches no file is an error; no patterns at
    all match nothing.
    """
    if isinstance(patterns, str):
        patterns = [patterns]
    if not patterns:
        return []
    if not cwd.is_dir():
        raise DiscoveryError(f"source directory not found: {cwd}")

    candidates = list(iter_relative_files(cwd))
    seen = set()
    matched: List[str] = []
    for pattern in patterns:
        spec = compile_glob_patterns_to_spec([pattern])
        hits = sorted(path_str for path_str in candidates if spec.match_file(path_str))
        if not hits:
            raise DiscoveryError(f'path or pattern "{pattern}" did not match any files in {cwd}')
        for path_str in hits:
            if path_str not in seen:
                seen.add(path_str)
                matched.append(path_str)
    log.info("files_matched", cwd=str(cwd), patterns=list(patterns), count=len(matched))
    return matched
