"""Single source of truth for shared constants and configuration defaults.

Values that are read from the environment are resolved at call time, not at
import, so tests can patch ``os.environ`` freely.
"""

from __future__ import annotations

from pathlib import Path

PLUGIN_NAME = "cdk-validator-kics"

# ---------------------------------------------------------------------------
# Bundled assets
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
BIN_DIR = PACKAGE_DIR / "bin"
LIBRARIES_PATH = PACKAGE_DIR / "assets" / "libraries"
QUERIES_PATH = PACKAGE_DIR / "assets" / "queries"

BINARY_NAME = "kics"
WINDOWS_BINARY_NAME = "kics.exe"

# ---------------------------------------------------------------------------
# Process execution
# ---------------------------------------------------------------------------

SCAN_TIMEOUT_SECONDS = 300.0
POLL_INTERVAL_SECONDS = 0.1
STDERR_LOG_LIMIT = 2000

# KICS reserves these for engine failure and SIGINT; any other code is a
# findings signal.
ENGINE_ERROR_EXIT_CODES = frozenset({126, 130})

# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

REPORT_FORMAT = "json"
REPORT_SUFFIX = ".json"
SUPPORTED_KICS_MAJOR_VERSIONS = (1, 2)

# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

ENV_TIMEOUT = "KICS_VALIDATOR_TIMEOUT"
ENV_BINARY = "KICS_VALIDATOR_BINARY"
ENV_OUTPUT_DIR = "KICS_VALIDATOR_OUTPUT_DIR"
ENV_LOG_LEVEL = "KICS_VALIDATOR_LOG_LEVEL"
