"""Jinja2 environment used to render template paths and contents.

Besides plain Jinja2 syntax, templates may call the registered helpers the
handlebars way, ``{{upper info.title}}``; the call is rewritten to
``{{ upper(info.title) }}`` before compilation.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from jinja2 import Environment, StrictUndefined
from jinja2.ext import Extension

HELPERS: dict[str, Callable[[str], str]] = {
    "upper": str.upper,
    "lower": str.lower,
}


def _helper(transform: Callable[[str], str]) -> Callable[[Any], str]:
    def call(value: Any) -> str:
        return transform(str(value))

    call.__name__ = transform.__name__
    return call


class SpecEnvironment(Environment):
    """Environment whose dotted lookups on dicts prefer keys over methods.

    ``{{ item.get.summary }}`` then reads the 'get' operation rather than
    the dict method of the same name.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, dict):
            try:
                return obj[attribute]
            except KeyError:
                pass
        return super().getattr(obj, attribute)


class HelperCallExtension(Extension):
    """Rewrite ``{{name arg}}`` into ``{{ name(arg) }}`` for each helper."""

    _pattern = re.compile(
        r"\{\{(-?)\s*("
        + "|".join(map(re.escape, HELPERS))
        + r")\b(?:\s+(?![|.])([^{}]*?))?\s*(-?)\}\}"
    )
    _subexpression = re.compile(
        r"\(\s*("
        + "|".join(map(re.escape, HELPERS))
        + r")\b(?:\s+(?![|.,)])((?:[^()]|\([^()]*\))*?))?\s*\)"
    )

    def preprocess(self, source: str, name: str | None, filename: str | None = None) -> str:
        return self._pattern.sub(self._rewrite, source)

    @classmethod
    def _rewrite(cls, match: re.Match[str]) -> str:
        lstrip, helper, arg, rstrip = match.groups()
        arg = cls._rewrite_subexpressions(arg or "")
        return f"{{{{{lstrip} {helper}({arg}) {rstrip}}}}}"

    @classmethod
    def _rewrite_subexpressions(cls, arg: str) -> str:
        """Turn handlebars sub-expressions ``(lower x)`` into ``lower(x)``."""
        while True:
            rewritten = cls._subexpression.sub(r"\1(\2)", arg)
            if rewritten == arg:
                return arg
            arg = rewritten


def build_engine() -> SpecEnvironment:
    """Create a fresh environment with the ``upper`` and ``lower`` helpers."""
    env = SpecEnvironment(
        extensions=[HelperCallExtension],
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.globals.update({name: _helper(fn) for name, fn in HELPERS.items()})
    return env


def render(engine: Environment, source: str, context: dict[str, Any]) -> str:
    """Render a template string against ``context``."""
    return engine.from_string(source).render(context)


def path_engine(engine: Environment) -> Environment:
    """Overlay of ``engine`` that only understands ``{{ }}`` expressions.

    Statement and comment openers such as ``{%`` and ``{#`` are legal in
    file names, so path templates use delimiters containing NUL, which no
    file name can.
    """
    return engine.overlay(
        block_start_string="\0{%",
        block_end_string="%}\0",
        comment_start_string="\0{#",
        comment_end_string="#}\0",
    )
