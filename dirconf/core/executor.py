from __future__ import annotations

from typing import Callable, Iterable, List

from .errors import DirconfError
from .objective import Objective
from .report import Reporter
from .target import Target


def query_before_action(obj: Objective, verb: str) -> bool:
    while True:
        prompt = f"{verb}: {obj.describe()}. Proceed? [y/N]: "
        input_str = input(prompt).strip().lower()
        match input_str:
            case "y" | "yes":
                return True
            case "n" | "no" | "":
                return False
            case _:
                print("Invalid input. Please enter `y` or `n`.")


def deal_with_failure(obj: Objective, ex: Exception, ui: Reporter) -> bool:
    ui.error(f"Objective failed: {obj.describe()}: {ex}")
    while True:
        prompt = f"""The objective {obj.describe()} failed.
if you want to deal with errors and rerun it, press `r` after fixing the issue.
if you want to handle it manually and skip it in here, press `s`.
(hint: you can open another terminal to fix the issue) [r/s]: """
        input_str = input(prompt).strip().lower()
        match input_str:
            case "r":
                return True
            case "s":
                return False
            case _:
                print("Invalid input. Please enter `r` or `s`.")


class Executor:
    """
    Run objectives against a target.

    - check: evaluate every objective and count the failures.
    - configure: reconcile objectives whose check fails.
    - remove: take objectives away, last declared first.
    """

    def __init__(self, ui: Reporter, no_confirm: bool = False, dry_run: bool = False) -> None:
        self.ui = ui
        self.no_confirm = no_confirm
        self.dry_run = dry_run

    def check(self, objectives: Iterable[Objective], target: Target) -> int:
        failed = 0
        for obj in objectives:
            self.ui.debug(f"Checking {obj.describe()}")
            if not obj.check(target, self.ui):
                failed += 1
        return failed

    def configure(self, objectives: Iterable[Objective], target: Target) -> int:
        failed = 0
        for obj in objectives:
            if obj.check(target, self.ui):
                continue
            if not self._apply(obj, "Configure", lambda o=obj: o.configure(target, self.ui)):
                failed += 1
        return failed

    def remove(self, objectives: Iterable[Objective], target: Target) -> int:
        todo: List[Objective] = list(objectives)
        failed = 0
        for obj in reversed(todo):
            if not self._apply(obj, "Remove", lambda o=obj: o.remove(target, self.ui)):
                failed += 1
        return failed

    def _apply(self, obj: Objective, verb: str, step: Callable[[], None]) -> bool:
        """Run one step; False only when it failed and was given up on."""
        if self.dry_run:
            print(f"  DRY-RUN: {verb} -> {obj.describe()}")
            return True
        if not self.no_confirm and not query_before_action(obj, verb):
            print(f"Skipping objective: {obj.describe()}")
            return True
        while True:
            try:
                step()
                return True
            except (DirconfError, OSError) as e:
                if self.no_confirm:
                    self.ui.error(f"Objective failed: {obj.describe()}: {e}")
                    return False
                if not deal_with_failure(obj, e, self.ui):
                    return False
