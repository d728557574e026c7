from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple
from xml.etree.ElementTree import Element

from ..config import ACCEPTED_VERDICT
from .errors import DeclarationError


@dataclass(frozen=True, slots=True)
class AcceptanceRule:
    """
    One known version of a package.

    ``pattern`` is a regular expression the whole installed version must match.
    A ``verdict`` of "OK" marks the version as good; anything else is the
    result of testing a bad version, and ``warnings`` explain what breaks.
    """

    pattern: str
    verdict: str
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        try:
            re.compile(self.pattern)
        except re.error as e:
            raise DeclarationError(f"Invalid version pattern {self.pattern!r}: {e}") from e
        object.__setattr__(self, "warnings", tuple(self.warnings))

    @property
    def accepted(self) -> bool:
        return self.verdict == ACCEPTED_VERDICT

    def matches(self, actual: Optional[str]) -> bool:
        if not actual:
            return False
        return re.fullmatch(self.pattern, actual) is not None

    @classmethod
    def from_element(cls, node: Element) -> "AcceptanceRule":
        pattern = node.get("version")
        if pattern is None:
            raise DeclarationError("<version> element without a version attribute")
        warnings = []
        for child in node:
            if child.tag != "warning":
                raise DeclarationError(
                    f"Unknown element <{child.tag}> in version {pattern}"
                )
            warnings.append(child.get("message", ""))
        return cls(pattern=pattern, verdict=node.get("tested", ""), warnings=tuple(warnings))
