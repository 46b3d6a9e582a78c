"""Render a template tree into an output tree.

Every entry below the template root has its relative path rendered against
the spec to find its output location. Directories are created there, files
have their contents rendered into a new file there.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

from jinja2 import Environment, TemplateError

from .engine import build_engine, path_engine, render
from .errors import ContentRenderError, FilesystemError, PathRenderError
from .loader import load_spec

logger = logging.getLogger(__name__)


def build_render_context(spec: dict[str, Any]) -> dict[str, Any]:
    """Expose the spec's top-level fields, and the whole spec as ``spec``."""
    context = dict(spec)
    context.setdefault("spec", spec)
    return context


def walk_template_tree(root: Path) -> Iterator[Path]:
    """Yield every entry below ``root`` depth-first, parents before children.

    Siblings come in name order. Symlinked directories are yielded but not
    descended into.
    """
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise FilesystemError(f"failed to list directory {root}") from e

    for entry in entries:
        yield entry
        if entry.is_dir() and not entry.is_symlink():
            yield from walk_template_tree(entry)


def relative_template_path(template_root: Path, entry: Path) -> str:
    """Path of ``entry`` relative to ``template_root``, '/'-separated."""
    return entry.relative_to(template_root).as_posix()


def _apply_directory(entry: Path, target_path: Path) -> None:
    try:
        target_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"failed to create directory {entry}") from e


def _apply_file(
    entry: Path, target_path: Path, context: dict[str, Any], engine: Environment
) -> None:
    try:
        with open(entry, encoding="utf-8", newline="") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(f"failed to read template {entry}") from e

    try:
        template = engine.from_string(source)
    except TemplateError as e:
        raise ContentRenderError(f"failed to render template {entry}") from e

    try:
        with open(target_path, "w", encoding="utf-8", newline="") as out:
            template.stream(context).dump(out)
    except OSError as e:
        raise FilesystemError(f"failed to write {target_path}") from e
    except Exception as e:
        raise ContentRenderError(f"failed to render template {entry}") from e


def render_tree(
    template_root: str | Path,
    target: str | Path,
    spec: dict[str, Any],
    engine: Environment,
) -> int:
    """Render every entry under ``template_root`` into ``target``.

    ``target`` must already exist. The first failure aborts the run; output
    written before it is left in place. Returns the number of entries applied.
    """
    template_root = Path(template_root)
    target = Path(target)
    if not template_root.is_dir():
        raise FilesystemError(f"template directory {template_root} does not exist")

    context = build_render_context(spec)
    paths = path_engine(engine)
    count = 0
    for entry in walk_template_tree(template_root):
        logger.debug(f"applying {entry}")
        local_path = relative_template_path(template_root, entry)

        try:
            eval_path = render(paths, local_path, context)
        except Exception as e:
            raise PathRenderError(f"failed to render template {local_path}") from e

        target_path = target / eval_path
        if entry.is_dir():
            _apply_directory(entry, target_path)
        else:
            _apply_file(entry, target_path, context, engine)
        count += 1

    return count


def generate(
    spec_path: str | Path,
    template_root: str | Path,
    target: str | Path = ".",
) -> int:
    """Load the spec, then render ``template_root`` into ``target``.

    The output root is created, with its ancestors, when missing.
    """
    spec = load_spec(spec_path)
    engine = build_engine()

    target = Path(target)
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"failed to create directory {target}") from e

    count = render_tree(template_root, target, spec, engine)
    logger.info(f"Rendered {count} entries from {template_root} into {target}")
    return count
