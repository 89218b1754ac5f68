from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Telemetry is configured when heks.runtime is first imported, so the log
# file has to be redirected before any test module imports the package.
os.environ.setdefault(
    "HEKS_LOG_FILE", str(Path(tempfile.gettempdir()) / "heks-tests.log")
)
os.environ.setdefault("HEKS_LOG_LEVEL", "WARNING")
