# hbswriter/core/templating/__init__.py
"""
Templating module for hbswriter.

Provides the HandlebarsEngine used to compile and render templates, along
with the per-engine helper and partial registries.
"""
from .engine import HandlebarsEngine, CompiledTemplate

__all__ = [
    "HandlebarsEngine",
    "CompiledTemplate",
]
