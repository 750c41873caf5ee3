# hbswriter/core/discovery/__init__.py
"""
File discovery for hbswriter: recursive directory listings and
multi-pattern glob matching against a source directory.
"""
from .pattern_matching import multi_glob
from .walker import walk_files

__all__ = ["multi_glob", "walk_files"]
