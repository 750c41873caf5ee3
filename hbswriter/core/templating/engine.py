# hbswriter/core/templating/engine.py
"""
Contains the HandlebarsEngine class: a pybars compiler plus the helper and
partial registries used when rendering.
"""
from typing import Any, Callable, Dict, Mapping
import pybars # type: ignore
import structlog

from hbswriter.exceptions import TemplateError

log = structlog.get_logger(__name__)

class CompiledTemplate:
    """A compiled template bound to the engine whose registries it renders with."""
    def __init__(self, engine: "HandlebarsEngine", template_fn: Callable[..., Any], name: str):
        self.engine = engine
        self.name = name
        self._template_fn = template_fn

    def render(self, context: Any) -> str:
        try:
            rendered = self._template_fn(
                context, helpers=self.engine.helpers, partials=self.engine.partials
            )
        except Exception as e:
            log.error("template_rendering_error_occurred", source=self.name, error_message=str(e))
            raise TemplateError(f"Template render failed for '{self.name}': {e}") from e
        return str(rendered)

    __call__ = render


class HandlebarsEngine:
    """
    Compiles Handlebars source with pybars and owns the helpers and partials
    templates can call.

    Each engine keeps its own registries, so two writers only share
    registrations when they are handed the same engine.
    """
    def __init__(self, compiler: Any = None):
        self.compiler = compiler or pybars.Compiler()
        self.helpers: Dict[str, Callable[..., Any]] = {}
        self.partials: Dict[str, Callable[..., Any]] = {}

    def register_helper(self, name: str, helper: Callable[..., Any]) -> None:
        if not callable(helper):
            raise TemplateError(f"helper '{name}' is not callable")
        if name in self.helpers and self.helpers[name] is not helper:
            log.debug("helper_replaced", name=name)
        self.helpers[name] = helper

    def register_helpers(self, helpers: Mapping[str, Callable[..., Any]]) -> None:
        for name, helper in helpers.items():
            self.register_helper(name, helper)

    def register_partial(self, name: str, source: str) -> None:
        self.partials[name] = self._compile_source(source, f"partial:{name}")
        log.debug("partial_registered", name=name)

    def compile(self, source: str, name: str = "<string>") -> CompiledTemplate:
        return CompiledTemplate(self, self._compile_source(source, name), name)

    def _compile_source(self, source: str, name: str) -> Callable[..., Any]:
        try:
            return self.compiler.compile(source)
        except Exception as e:
            log.error("template_compilation_failed", source=name, error=str(e))
            raise TemplateError(f"Failed to compile template '{name}': {e}") from e
