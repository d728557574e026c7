from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional

from ..core.errors import StructuralTemplateError
from .include import IncludeResolver
from .substitute import substitute

DOLLAR = "${dollar}"


class Renderer(ABC):
    @abstractmethod
    def render(
        self,
        variables: Optional[Mapping[str, str]],
        template: str,
        base_folder: Optional[str | Path],
    ) -> str:
        ...


class SimpleRenderer(Renderer):
    """
    Renders a template in three passes:

    1. include directives are expanded, recursively;
    2. ``${name}`` placeholders are substituted from ``variables``;
    3. ``${dollar}`` becomes a literal ``$``.

    The dollar escape must stay last, otherwise an escaped ``${name}`` in
    the template would be substituted as well.
    """

    def __init__(self, origin: Optional[str | Path] = None) -> None:
        self.origin = origin

    def render(
        self,
        variables: Optional[Mapping[str, str]],
        template: str,
        base_folder: Optional[str | Path],
    ) -> str:
        text = IncludeResolver(base_folder, origin=self.origin).resolve(template)
        if variables is not None:
            text = substitute(text, variables)
        return text.replace(DOLLAR, "$")


def render_file(path: str | Path, variables: Optional[Mapping[str, str]] = None) -> str:
    """Render the template stored at ``path``; includes are relative to its folder."""
    path = Path(path)
    try:
        template = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StructuralTemplateError(f"Cannot read template {path}: {e}") from e
    return SimpleRenderer(origin=path).render(variables, template, path.parent)
