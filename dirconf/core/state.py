from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from ..config import TARGET_FILE
from .errors import DirconfError
from .target import PackageInfo, Target


class SystemState(Target):
    """Target system described by a JSON snapshot file."""

    def __init__(self, path: Path = TARGET_FILE, root: Optional[Path] = None) -> None:
        self.path = Path(path)
        self.name = self.path.stem
        self.root = Path(root) if root is not None else self.path.parent
        self.installed: Dict[str, PackageInfo] = {}
        self.properties: Dict[str, str] = {}

    def load(self) -> "SystemState":
        if not self.path.exists():
            self.installed = {}
            self.properties = {}
            return self
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise DirconfError(f"Invalid target file {self.path}: {e}") from e
        self.name = data.get("name", self.name)
        self.installed = {
            name: PackageInfo(
                name=name,
                full_version=info.get("version", ""),
                installed_at=info.get("installed_at"),
            )
            for name, info in data.get("packages", {}).items()
        }
        self.properties = {str(k): str(v) for k, v in data.get("properties", {}).items()}
        return self

    def package_info(self, name: str) -> Optional[PackageInfo]:
        return self.installed.get(name)
