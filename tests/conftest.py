from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from dirconf.core.report import Reporter
from dirconf.core.target import PackageInfo, Target


class RecordingReporter(Reporter):
    def __init__(self) -> None:
        super().__init__()
        self.messages: List[Tuple[str, str]] = []

    def _emit(self, level: int, message: str) -> None:
        self.messages.append((logging.getLevelName(level), message))

    def of(self, level: str) -> List[str]:
        return [m for lvl, m in self.messages if lvl == level]


class FakeTarget(Target):
    def __init__(
        self,
        packages: Optional[Dict[str, str]] = None,
        root: Optional[Path] = None,
        properties: Optional[Dict[str, str]] = None,
    ) -> None:
        self.name = "fake"
        self.root = root or Path.cwd()
        self.properties = dict(properties or {})
        self.packages = {
            name: PackageInfo(name=name, full_version=v) for name, v in (packages or {}).items()
        }
        self.lookups = 0

    def package_info(self, name: str) -> Optional[PackageInfo]:
        self.lookups += 1
        return self.packages.get(name)


@pytest.fixture
def ui() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def make_target():
    return FakeTarget


@pytest.fixture(autouse=True)
def reset_dirconf_logger():
    yield
    logger = logging.getLogger("dirconf")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
