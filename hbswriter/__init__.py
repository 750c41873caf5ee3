"""
hbswriter: renders a tree of Handlebars templates into a destination directory.
"""
__version__ = "0.1.0"

from hbswriter.config.settings import WriterOptions, default_dest_file, dest_file_for_extension
from hbswriter.core.templating import HandlebarsEngine
from hbswriter.core.tree import resolve_path_tree
from hbswriter.core.writer import HandlebarsWriter
from hbswriter.exceptions import (
    HbsWriterError, ConfigError, DiscoveryError, TemplateError, OutputError
)

__all__ = [
    "__version__",
    "HandlebarsWriter",
    "HandlebarsEngine",
    "WriterOptions",
    "default_dest_file",
    "dest_file_for_extension",
    "resolve_path_tree",
    "HbsWriterError",
    "ConfigError",
    "DiscoveryError",
    "TemplateError",
    "OutputError",
]
