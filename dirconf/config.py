from __future__ import annotations

import os
from pathlib import Path

# Snapshot of the target system (deployed packages and its properties).
# By default, use "<cwd>/.dirconf_target.json".
TARGET_FILE = Path(
    os.environ.get("DIRCONF_TARGET", Path.cwd() / ".dirconf_target.json")
).resolve()

# Optional key=value file with default template variables
PROPERTIES_FILE = os.environ.get("DIRCONF_PROPERTIES") or None

# Runtime behavior
LOG_LEVEL = os.environ.get("DIRCONF_LOG_LEVEL", "INFO")
DRY_RUN = bool(int(os.environ.get("DIRCONF_DRY_RUN", "0")))

# Template engine defaults
DEFAULT_INCLUDE_PATTERN = r".+\.ctf"

# Verdict of an acceptance rule that marks a version as good
ACCEPTED_VERDICT = "OK"
