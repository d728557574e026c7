"""
Include directives for configuration templates.

Two forms are understood, both resolved relative to the template folder
unless the path is absolute:

* ``${include:file=<path>}`` inserts the content of one file.
* ``${include:folder=<path>;pattern=<regex>}`` inserts every file in the
  folder whose name matches ``<regex>``; the pattern defaults to ``.+\\.ctf``.

Included content is itself scanned for includes before it is inserted.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

from ..config import DEFAULT_INCLUDE_PATTERN
from ..core.errors import StructuralTemplateError

logger = logging.getLogger(__name__)

INCLUDE_RE = re.compile(r"\$\{include:(.+?)\}")
FILE_RE = re.compile(r"file=(.+)")
FOLDER_RE = re.compile(r"folder=([^;]+)(;pattern=(.+))?")


class IncludeResolver:
    def __init__(
        self,
        base_folder: Optional[str | Path] = None,
        origin: Optional[str | Path] = None,
    ) -> None:
        self.base_folder = Path(base_folder) if base_folder is not None else Path.cwd()
        # files currently being expanded, outermost first
        self._chain: List[Path] = [Path(origin).resolve()] if origin is not None else []

    def resolve(self, text: str) -> str:
        parts: List[str] = []
        pos = 0
        for m in INCLUDE_RE.finditer(text):
            replacement = self._expand(m.group(1))
            if replacement is None:
                # not a file or folder spec, keep the directive as written
                continue
            parts.append(text[pos : m.start()])
            parts.append(replacement)
            pos = m.end()
        if pos == 0:
            return text
        parts.append(text[pos:])
        return "".join(parts)

    def _expand(self, spec: str) -> Optional[str]:
        m_file = FILE_RE.fullmatch(spec)
        if m_file:
            source = self._locate(m_file.group(1))
            logger.debug("Found an include of a file. Filename: %s", source)
            if not source.is_file():
                raise StructuralTemplateError(f"File {source} does not exist")
            return self._include(source)

        m_folder = FOLDER_RE.fullmatch(spec)
        if m_folder:
            pattern = m_folder.group(3) or DEFAULT_INCLUDE_PATTERN
            source = self._locate(m_folder.group(1))
            logger.debug("Found an include of a folder. Folder: %s using pattern %s", source, pattern)
            if not source.exists():
                raise StructuralTemplateError(f"Folder {source} does not exist")
            if not source.is_dir():
                raise StructuralTemplateError(f"Folder {source} is not a folder")
            try:
                name_re = re.compile(f"^.*{pattern}$")
            except re.error as e:
                raise StructuralTemplateError(f"Invalid include pattern {pattern!r}: {e}") from e
            chunks = []
            for entry in sorted(source.iterdir(), key=lambda p: p.name):
                if entry.is_file() and name_re.fullmatch(entry.name):
                    logger.debug("Loading file %s", entry)
                    chunks.append(self._include(entry))
            return "".join(chunks)

        return None

    def _locate(self, name: str) -> Path:
        path = Path(name)
        if path.is_absolute():
            return path
        return self.base_folder / path

    def _include(self, path: Path) -> str:
        key = path.resolve()
        if key in self._chain:
            cycle = " -> ".join(str(p) for p in [*self._chain, key])
            raise StructuralTemplateError(f"Include cycle detected: {cycle}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StructuralTemplateError(f"Cannot read {path}: {e}") from e
        self._chain.append(key)
        try:
            return self.resolve(content)
        finally:
            self._chain.pop()
