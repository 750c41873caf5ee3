import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional
import structlog

from hbswriter.exceptions import ConfigError

log = structlog.get_logger(__name__)

TEMPLATE_EXTENSIONS = (".hbs", ".handlebars")
HELPER_EXTENSIONS = (".py",)
DEFAULT_OUTPUT_EXTENSION = "html"
DEFAULT_FILE_PATTERNS = ("**/*.hbs",)

_TEMPLATE_SUFFIX_RE = re.compile(r"(hbs|handlebars)$")


def dest_file_for_extension(extension: str) -> Callable[[str], str]:
    # builds a destination mapping that swaps a trailing hbs/handlebars for `extension`.
    extension = extension.lstrip(".")

    def dest_file(filename: str) -> str:
        return _TEMPLATE_SUFFIX_RE.sub(extension, filename, count=1)

    return dest_file


def default_dest_file(filename: str) -> str:
    """Maps `page.hbs` / `page.handlebars` to `page.html`; other names are kept."""
    return _TEMPLATE_SUFFIX_RE.sub(DEFAULT_OUTPUT_EXTENSION, filename, count=1)


class HelpersKind(Enum):
    # the shapes accepted for options.helpers.
    NONE = "none"
    FACTORY = "factory"
    MAPPING = "mapping"
    DIRECTORY = "directory"


class ContextKind(Enum):
    # a context is either one value shared by every file or computed per file.
    STATIC = "static"
    PER_FILE = "per_file"


@dataclass(frozen=True)
class HelpersSource:
    kind: HelpersKind
    payload: Any = None

    @classmethod
    def parse(cls, helpers: Any) -> "HelpersSource":
        if helpers is None or (isinstance(helpers, str) and not helpers):
            return cls(HelpersKind.NONE)
        if isinstance(helpers, (str, os.PathLike)):
            return cls(HelpersKind.DIRECTORY, os.fspath(helpers))
        if isinstance(helpers, Mapping):
            return cls(HelpersKind.MAPPING, helpers)
        if callable(helpers):
            return cls(HelpersKind.FACTORY, helpers)
        raise ConfigError(
            "options.helpers must be a mapping, a callable that returns a mapping or a directory path"
        )


@dataclass(frozen=True)
class ContextSource:
    kind: ContextKind
    payload: Any = None

    @classmethod
    def parse(cls, context: Any) -> "ContextSource":
        if callable(context):
            return cls(ContextKind.PER_FILE, context)
        return cls(ContextKind.STATIC, {} if context is None else context)


def parse_partials(partials: Any) -> Optional[str]:
    # returns the partials directory, or None when partials are not configured.
    if partials is None or (isinstance(partials, str) and not partials):
        return None
    if not isinstance(partials, (str, os.PathLike)):
        raise ConfigError("options.partials must be a directory path")
    return os.fspath(partials)


@dataclass
class WriterOptions:
    # holds the rendering options of one HandlebarsWriter.
    context: Any = None
    dest_file: Optional[Callable[[str], str]] = None
    handlebars: Any = None
    partials: Any = None
    helpers: Any = None
    preserve_leading_separator: bool = False

    # resolved once in __post_init__, not set directly.
    context_source: ContextSource = field(init=False)
    helpers_source: HelpersSource = field(init=False)
    partials_dir: Optional[str] = field(init=False)

    def __post_init__(self):
        if self.dest_file is None:
            self.dest_file = default_dest_file
        elif not callable(self.dest_file):
            raise ConfigError("options.dest_file must be a callable mapping a source name to a destination name")
        self.context_source = ContextSource.parse(self.context)
        self.helpers_source = HelpersSource.parse(self.helpers)
        self.partials_dir = parse_partials(self.partials)
        log.debug(
            "writer_options_resolved",
            context=self.context_source.kind.value,
            helpers=self.helpers_source.kind.value,
            partials=self.partials_dir,
        )

    @classmethod
    def from_mapping(cls, options: Optional[Mapping], **overrides: Any) -> "WriterOptions":
        if isinstance(options, WriterOptions) and not overrides:
            return options
        if isinstance(options, WriterOptions):
            values = {
                "context": options.context,
                "dest_file": options.dest_file,
                "handlebars": options.handlebars,
                "partials": options.partials,
                "helpers": options.helpers,
                "preserve_leading_separator": options.preserve_leading_separator,
            }
        else:
            values = dict(options or {})
        values.update(overrides)
        unknown = set(values) - {
            "context", "dest_file", "handlebars", "partials", "helpers", "preserve_leading_separator",
        }
        if unknown:
            raise ConfigError(f"unknown writer options: {', '.join(sorted(unknown))}")
        return cls(**values)
