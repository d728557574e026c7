from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from colorama import Fore, Style, just_fix_windows_console


class Reporter(ABC):
    """
    Diagnostic sink used by objectives.

    Counts errors and warnings so callers can turn a run into an exit code.
    Emitting a message never raises into the calling operation.
    """

    def __init__(self) -> None:
        self.errors = 0
        self.warnings = 0

    @abstractmethod
    def _emit(self, level: int, message: str) -> None:
        ...

    def _safe_emit(self, level: int, message: str) -> None:
        try:
            self._emit(level, message)
        except (OSError, ValueError):
            # closed or broken output stream
            pass

    def error(self, message: str) -> None:
        self.errors += 1
        self._safe_emit(logging.ERROR, message)

    def warn(self, message: str) -> None:
        self.warnings += 1
        self._safe_emit(logging.WARNING, message)

    def info(self, message: str) -> None:
        self._safe_emit(logging.INFO, message)

    def debug(self, message: str) -> None:
        self._safe_emit(logging.DEBUG, message)


class LogReporter(Reporter):
    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        super().__init__()
        self.logger = logger or logging.getLogger("dirconf.report")

    def _emit(self, level: int, message: str) -> None:
        self.logger.log(level, message)


class TextUi(Reporter):
    """Console reporter with colour-coded severity labels."""

    _LABELS = {
        logging.ERROR: ("ERROR", Fore.RED),
        logging.WARNING: ("WARNING", Fore.YELLOW),
        logging.INFO: ("info", ""),
        logging.DEBUG: ("DEBUG", Fore.CYAN),
    }

    def __init__(
        self,
        verbose: bool = False,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        super().__init__()
        just_fix_windows_console()
        self.verbose = verbose
        self.out = out
        self.err = err

    def _emit(self, level: int, message: str) -> None:
        if level == logging.DEBUG and not self.verbose:
            return
        label, color = self._LABELS[level]
        if level >= logging.WARNING:
            stream = self.err or sys.stderr
        else:
            stream = self.out or sys.stdout
        isatty = getattr(stream, "isatty", None)
        if color and isatty is not None and isatty():
            print(f"{color}({label}){Style.RESET_ALL} {message}", file=stream)
        else:
            print(f"({label}) {message}", file=stream)


def ensure_reporter(ui: Optional[Reporter]) -> Reporter:
    return ui if ui is not None else LogReporter()
