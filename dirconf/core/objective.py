from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from .report import Reporter
from .target import Target


class Objective(ABC):
    """Desired state of a target: check it, bring it about, or take it away."""

    @abstractmethod
    def check(self, target: Target, ui: Optional[Reporter] = None) -> bool:
        ...

    @abstractmethod
    def configure(self, target: Target, ui: Optional[Reporter] = None) -> None:
        ...

    @abstractmethod
    def remove(self, target: Target, ui: Optional[Reporter] = None) -> None:
        ...

    def describe(self) -> str:
        return self.__class__.__name__


class ObjectiveSet:
    """All objectives declared in one file, in declaration order."""

    def __init__(
        self,
        name: str,
        objectives: Sequence[Objective],
        source: Optional[Path] = None,
    ) -> None:
        self.name = name
        self.objectives: List[Objective] = list(objectives)
        self.source = source

    def __iter__(self) -> Iterator[Objective]:
        return iter(self.objectives)

    def __len__(self) -> int:
        return len(self.objectives)
