from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True, slots=True)
class PackageInfo:
    name: str
    full_version: str
    installed_at: Optional[str] = None


class Target(ABC):
    """
    Handle on the system objectives are evaluated against.

    ``package_info`` returns None when the package is not deployed at all,
    which is not the same as a deployed package with an empty version.
    """

    name: str
    root: Path
    properties: Dict[str, str]

    @abstractmethod
    def package_info(self, name: str) -> Optional[PackageInfo]:
        ...

    def variables(self) -> Dict[str, str]:
        """Template variables for this system: its properties plus sys.* entries."""
        result = dict(self.properties)
        result["sys.name"] = self.name
        result["sys.root"] = str(self.root)
        return result
