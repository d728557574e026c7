from __future__ import annotations

from pathlib import Path
from typing import Optional
from xml.etree.ElementTree import Element

from ..template.renderer import render_file
from ..utils.fs import ensure_dir, read_if_exists, write_text_atomic
from .errors import DeclarationError, ObjectiveError
from .objective import Objective
from .report import Reporter, ensure_reporter
from .target import Target


class TemplateObjective(Objective):
    """A file on the target whose content is a rendered template."""

    def __init__(self, name: str, source: str | Path, dest: str | Path, mode: int = 0o644) -> None:
        self.name = name
        self.source = Path(source)
        self.dest = Path(dest)
        self.mode = mode

    @classmethod
    def from_element(cls, node: Element, base_folder: Path) -> "TemplateObjective":
        name = node.get("name")
        source = node.get("source")
        dest = node.get("dest")
        if not name or not source or not dest:
            raise DeclarationError("<template> needs name, source and dest attributes")
        if len(node):
            raise DeclarationError(f"Unknown element <{node[0].tag}> in template section {name}")
        source_path = Path(source)
        if not source_path.is_absolute():
            source_path = base_folder / source_path
        return cls(name=name, source=source_path, dest=dest)

    def destination(self, target: Target) -> Path:
        if self.dest.is_absolute():
            return self.dest
        return target.root / self.dest

    def render(self, target: Target) -> str:
        return render_file(self.source, target.variables())

    def check(self, target: Target, ui: Optional[Reporter] = None) -> bool:
        ui = ensure_reporter(ui)
        path = self.destination(target)
        try:
            current = read_if_exists(path)
        except (OSError, UnicodeDecodeError) as e:
            ui.error(f"Template {self.name}: cannot read {path}: {e}")
            return False
        if current is None:
            ui.error(f"Template {self.name}: {path} does not exist")
            return False
        if current != self.render(target):
            ui.error(f"Template {self.name}: {path} differs from the rendered template")
            return False
        ui.debug(f"Template {self.name}: {path} is up to date")
        return True

    def configure(self, target: Target, ui: Optional[Reporter] = None) -> None:
        ui = ensure_reporter(ui)
        path = self.destination(target)
        content = self.render(target)
        try:
            ensure_dir(path.parent)
            write_text_atomic(path, content, mode=self.mode)
        except OSError as e:
            raise ObjectiveError(f"Cannot write {path}: {e}") from e
        ui.info(f"Template {self.name}: wrote {path}")

    def remove(self, target: Target, ui: Optional[Reporter] = None) -> None:
        ui = ensure_reporter(ui)
        path = self.destination(target)
        if not path.exists():
            return
        try:
            path.unlink()
        except OSError as e:
            raise ObjectiveError(f"Cannot remove {path}: {e}") from e
        ui.info(f"Template {self.name}: removed {path}")

    def describe(self) -> str:
        return f"TemplateObjective({self.name} -> {self.dest})"
