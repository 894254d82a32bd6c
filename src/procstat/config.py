"""
Runtime configuration for procstat.

Values come from the environment and are read once at import time.
"""

import os

# Root of the proc filesystem; override to read records from a snapshot.
PROC_ROOT = os.getenv("PROCSTAT_PROC_ROOT", "/proc")

LOG_LEVEL = os.getenv("PROCSTAT_LOG_LEVEL", "WARNING")
