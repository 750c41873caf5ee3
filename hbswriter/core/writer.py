# hbswriter/core/writer.py
import asyncio
import inspect
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence, Union
import structlog

from hbswriter.config.settings import (
    HELPER_EXTENSIONS,
    TEMPLATE_EXTENSIONS,
    ContextKind,
    HelpersKind,
    WriterOptions,
)
from hbswriter.core.discovery import multi_glob, walk_files
from hbswriter.core.output import write_to_file
from hbswriter.core.templating import HandlebarsEngine
from hbswriter.core.templating.helpers import helpers_from_module, import_helper_file
from hbswriter.core.tree import resolve_path_tree
from hbswriter.exceptions import ConfigError
from hbswriter.util import registry_name, strip_utf8_bom

log = structlog.get_logger(__name__)

ReadTree = Callable[[Any], Union[Path, str, Awaitable[Union[Path, str]]]]


class HandlebarsWriter:
    """
    Renders every file of an input tree that matches `files` into a
    destination directory.

    Partials and helpers are (re)loaded on construction and again at the
    start of each write cycle, so edits on disk are picked up between cycles.
    """
    def __init__(
        self,
        input_tree: Any,
        files: Union[str, Sequence[str]],
        options: Optional[Union[WriterOptions, Mapping[str, Any]]] = None,
        **kwargs: Any,
    ):
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")
        self.input_tree = input_tree
        self.files: List[str] = [files] if isinstance(files, str) else list(files)
        self.options: WriterOptions = WriterOptions.from_mapping(options, **kwargs)
        self.dest_file: Callable[[str], str] = self.options.dest_file
        handlebars = self.options.handlebars
        if handlebars is None:
            handlebars = HandlebarsEngine()
        elif not isinstance(handlebars, HandlebarsEngine):
            # a bare pybars-compatible compiler gets its own registries.
            handlebars = HandlebarsEngine(compiler=handlebars)
        self.handlebars: HandlebarsEngine = handlebars

        self.load_partials()
        self.load_helpers()

    def load_helpers(self) -> None:
        source = self.options.helpers_source
        if source.kind is HelpersKind.NONE:
            return

        if source.kind is HelpersKind.FACTORY:
            helpers = source.payload()
            if not isinstance(helpers, Mapping):
                raise ConfigError(
                    f"options.helpers factory must return a mapping, got {type(helpers).__name__}"
                )
            self.handlebars.register_helpers(helpers)
        elif source.kind is HelpersKind.MAPPING:
            self.handlebars.register_helpers(source.payload)
        else:
            helpers_path = self._configured_dir(source.payload, "helpers")
            for rel_path in walk_files(helpers_path, HELPER_EXTENSIONS):
                name = registry_name(rel_path, HELPER_EXTENSIONS, self.options.preserve_leading_separator)
                module = import_helper_file(helpers_path / rel_path)
                self.handlebars.register_helpers(helpers_from_module(module, name))
        self.log.debug("helpers_loaded", kind=source.kind.value, count=len(self.handlebars.helpers))

    def load_partials(self) -> None:
        if self.options.partials_dir is None:
            return

        partials_path = self._configured_dir(self.options.partials_dir, "partials")
        partial_files = walk_files(partials_path, TEMPLATE_EXTENSIONS)
        for rel_path in partial_files:
            name = registry_name(rel_path, TEMPLATE_EXTENSIONS, self.options.preserve_leading_separator)
            source = strip_utf8_bom((partials_path / rel_path).read_bytes()).decode("utf-8")
            self.handlebars.register_partial(name, source)
        self.log.debug("partials_loaded", path=str(partials_path), count=len(partial_files))

    def _configured_dir(self, configured: str, option_name: str) -> Path:
        # configured directories are relative to the process working directory.
        directory = Path.cwd() / configured
        if not directory.is_dir():
            raise ConfigError(f"options.{option_name} directory not found: {directory}")
        return directory

    async def write(self, read_tree: ReadTree, dest_dir: Union[str, Path]) -> List[Path]:
        """
        Runs one write cycle and returns the written destination paths.

        Every matched file is rendered in its own task, with file I/O and
        rendering on a worker thread. The first failure is
        raised once the cycle is gathered; outputs written before it stay on
        disk.
        """
        self.load_partials()
        self.load_helpers()

        source_dir = read_tree(self.input_tree)
        if inspect.isawaitable(source_dir):
            source_dir = await source_dir
        source_dir = Path(source_dir)
        dest_path = Path(dest_dir)

        target_files = multi_glob(self.files, cwd=source_dir)
        self.log.info("write_cycle_started", source_dir=str(source_dir), dest_dir=str(dest_path),
                      files=len(target_files))

        written = await asyncio.gather(*(
            self._render_file(source_dir, dest_path, target_file) for target_file in target_files
        ))
        self.log.info("write_cycle_complete", dest_dir=str(dest_path), files=len(written))
        return list(written)

    async def _resolve_context(self, target_file: str) -> Any:
        source = self.options.context_source
        if source.kind is ContextKind.STATIC:
            return source.payload
        context = source.payload(target_file)
        if inspect.isawaitable(context):
            context = await context
        return context

    async def _render_file(self, source_dir: Path, dest_dir: Path, target_file: str) -> Path:
        context = await self._resolve_context(target_file)
        return await asyncio.to_thread(self._render_to_disk, source_dir, dest_dir, target_file, context)

    def _render_to_disk(self, source_dir: Path, dest_dir: Path, target_file: str, context: Any) -> Path:
        source_text = strip_utf8_bom((source_dir / target_file).read_bytes()).decode("utf-8")
        template = self.handlebars.compile(source_text, name=target_file)
        rendered = template.render(context)

        dest_filepath = self._dest_path(dest_dir, target_file)
        write_to_file(dest_filepath, rendered)
        self.log.debug("file_rendered", source=target_file, dest=str(dest_filepath))
        return dest_filepath

    def _dest_path(self, dest_dir: Path, target_file: str) -> Path:
        # joined like a relative path: a leading separator never escapes dest_dir.
        relative = Path(self.dest_file(target_file)).as_posix().lstrip("/")
        return dest_dir / relative

    def build(self, dest_dir: Union[str, Path], read_tree: Optional[ReadTree] = None) -> List[Path]:
        """Synchronous write cycle; `read_tree` defaults to treating the input tree as a path."""
        return asyncio.run(self.write(read_tree or resolve_path_tree, dest_dir))
