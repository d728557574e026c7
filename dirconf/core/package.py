from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from xml.etree.ElementTree import Element

from .errors import DeclarationError
from .objective import Objective
from .report import Reporter, ensure_reporter
from .target import Target
from .version import AcceptanceRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PackageObjective(Objective):
    """
    Checks that a package is deployed on the target in a known good version.

    Rules are tried in declaration order. Scanning stops at the first matching
    rule whose verdict is "OK"; matching rules with any other verdict are
    reported and scanning continues.
    """

    name: str
    rules: Tuple[AcceptanceRule, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name or not isinstance(self.name, str):
            raise DeclarationError("PackageObjective.name must be non-empty str")
        object.__setattr__(self, "rules", tuple(self.rules))

    @classmethod
    def from_element(cls, node: Element) -> "PackageObjective":
        name = node.get("name")
        if not name:
            raise DeclarationError("<package> element without a name attribute")
        rules = []
        for child in node:
            if child.tag == "version":
                rules.append(AcceptanceRule.from_element(child))
            else:
                raise DeclarationError(f"Unknown element <{child.tag}> in package section {name}")
        return cls(name=name, rules=tuple(rules))

    def evaluate(
        self, actual: Optional[str]
    ) -> Tuple[Optional[AcceptanceRule], List[AcceptanceRule]]:
        """Return the accepting rule (if any) and the rejecting rules matched before it."""
        rejected: List[AcceptanceRule] = []
        for rule in self.rules:
            logger.debug("Checking %s against version %s", self.name, rule.pattern)
            if not rule.matches(actual):
                continue
            if rule.accepted:
                return rule, rejected
            rejected.append(rule)
        return None, rejected

    def check(self, target: Target, ui: Optional[Reporter] = None) -> bool:
        ui = ensure_reporter(ui)
        info = target.package_info(self.name)
        if info is None:
            ui.error(f"Required package {self.name} is not installed")
            return False

        # TODO: check the package is loaded on every node of a clustered target
        actual = info.full_version
        accepted, rejected = self.evaluate(actual)
        for rule in rejected:
            ui.error(
                f"Required package {self.name} has version {actual} that tested {rule.verdict}"
            )
            for message in rule.warnings:
                ui.warn(message)

        if accepted is not None:
            ui.info(f"{self.name}: {accepted.pattern} matches actual version {actual}")
            return True
        if not rejected:
            ui.error(
                f"Required package {self.name} has version {actual} "
                "that was not mentioned in the known versions"
            )
        return False

    def configure(self, target: Target, ui: Optional[Reporter] = None) -> None:
        ensure_reporter(ui).debug(f"Package {self.name}: automatic loading not supported")

    def remove(self, target: Target, ui: Optional[Reporter] = None) -> None:
        ensure_reporter(ui).debug(f"Package {self.name}: automatic unloading not supported")

    def describe(self) -> str:
        return f"PackageObjective({self.name})"
