"""Error kinds raised while loading a spec or rendering a template tree.

Every error is raised with ``raise ... from exc`` so the underlying OS,
parser or template error stays reachable through the cause chain.
"""

from __future__ import annotations

from typing import Iterator


class GeneratorError(Exception):
    """Base class for every failure surfaced to the command line."""

    def causes(self) -> Iterator[BaseException]:
        """Yield chained causes, outermost first."""
        seen = {id(self)}
        current = self.__cause__ or self.__context__
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            yield current
            current = current.__cause__ or current.__context__

    def chain(self) -> Iterator[BaseException]:
        """Yield this error followed by its causes."""
        yield self
        yield from self.causes()


class SpecParseError(GeneratorError):
    """The spec file is unreadable, malformed or of an unsupported version."""


class PathRenderError(GeneratorError):
    """A template-relative path failed to render."""


class ContentRenderError(GeneratorError):
    """A template file's contents failed to render."""


class FilesystemError(GeneratorError):
    """Creating, listing, reading or writing a path failed."""
