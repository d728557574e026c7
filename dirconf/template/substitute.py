from __future__ import annotations

import re
from typing import Mapping

PLACEHOLDER_RE = re.compile(r"\$\{([^${}]+)\}")


def substitute(text: str, variables: Mapping[str, str]) -> str:
    """Replace ``${name}`` with ``variables[name]``; unknown names are left as is."""

    def repl(m: re.Match) -> str:
        value = variables.get(m.group(1))
        return m.group(0) if value is None else str(value)

    return PLACEHOLDER_RE.sub(repl, text)
