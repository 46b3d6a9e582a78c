"""openapi-render: generate files and directories from templates fed by an OpenAPI spec."""

__version__ = "0.1.0"

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .codegen import generate, render_tree
from .engine import build_engine
from .errors import (
    ContentRenderError,
    FilesystemError,
    GeneratorError,
    PathRenderError,
    SpecParseError,
)
from .loader import load_spec
from .cli import main

__all__ = [
    "ContentRenderError",
    "FilesystemError",
    "GeneratorError",
    "PathRenderError",
    "SpecParseError",
    "build_engine",
    "generate",
    "load_spec",
    "main",
    "render_tree",
]
