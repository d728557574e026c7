from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List
from xml.etree import ElementTree

from dotenv import dotenv_values

from ..core.errors import DeclarationError, DeclarationNotFoundError
from ..core.objective import Objective, ObjectiveSet
from ..core.package import PackageObjective
from ..core.template_objective import TemplateObjective


def collect_files(paths: Iterable[str | Path]) -> List[Path]:
    """
    Expand the command line arguments into declaration files.

    Directories contribute the regular files directly inside them.
    """
    result: List[Path] = []
    for p in paths:
        path = Path(p)
        if path.is_file():
            result.append(path)
        elif path.is_dir():
            result.extend(f for f in sorted(path.iterdir()) if f.is_file())
        else:
            raise DeclarationNotFoundError(str(p))
    return result


def load_objectives(path: str | Path) -> ObjectiveSet:
    """
    Load the objectives declared in a ccm file, e.g.::

        <ccm name="base">
          <package name="appserver">
            <version version="4\\.3\\..*" tested="OK"/>
            <version version="4\\.2\\..*" tested="FAILED">
              <warning message="session replication broken"/>
            </version>
          </package>
          <template name="web" source="web.ctf" dest="conf/web.xml"/>
        </ccm>
    """
    path = Path(path)
    if not path.is_file():
        raise DeclarationNotFoundError(str(path))
    try:
        root = ElementTree.parse(path).getroot()
    except ElementTree.ParseError as e:
        raise DeclarationError(f"{path} is not a valid declaration: {e}") from e
    if root.tag != "ccm":
        raise DeclarationError(f"{path}: expected <ccm> root element, found <{root.tag}>")

    objectives: List[Objective] = []
    for child in root:
        if child.tag == "package":
            objectives.append(PackageObjective.from_element(child))
        elif child.tag == "template":
            objectives.append(TemplateObjective.from_element(child, path.parent))
        else:
            raise DeclarationError(f"Unknown element <{child.tag}> in {path}")
    return ObjectiveSet(root.get("name") or path.stem, objectives, source=path)


def load_properties(path: str | Path) -> Dict[str, str]:
    """
    Read a key=value file into a variable map.

    Lines that do not parse are skipped by dotenv with a warning; keys without
    a value are dropped. ``${...}`` in values is kept for the template engine.
    """
    path = Path(path)
    if not path.is_file():
        raise DeclarationNotFoundError(str(path))
    try:
        values = dotenv_values(path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DeclarationError(f"Cannot read properties file {path}: {e}") from e
    return {key: value for key, value in values.items() if value is not None}
