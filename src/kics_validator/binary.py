"""Scanner binary selection by host OS and CPU architecture.

Binaries are bundled as ``bin/<os>_<arch>/kics`` (``kics.exe`` on Windows).
Resolution happens once, when the validator is constructed, so an
unsupported architecture aborts plugin construction instead of failing a scan.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

from kics_validator import defaults
from kics_validator.errors import ConfigurationError

log = logging.getLogger(__name__)

_ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
}


def normalize_os(system: str | None = None) -> str:
    name = (system if system is not None else platform.system()).lower()
    if name in ("windows", "win32"):
        return "windows"
    return name


def normalize_arch(machine: str | None = None) -> str:
    raw = machine if machine is not None else platform.machine()
    arch = _ARCH_MAP.get(raw.lower())
    if arch is None:
        raise ConfigurationError(f"Architecture {raw} is not supported")
    return arch


def resolve_binary(
    bin_dir: str | Path | None = None,
    *,
    system: str | None = None,
    machine: str | None = None,
) -> Path:
    """Return the scanner executable for this host.

    ``KICS_VALIDATOR_BINARY`` replaces the bundled path, but the architecture
    check still runs so behaviour does not depend on the override.
    """
    os_name = normalize_os(system)
    arch = normalize_arch(machine)

    override = os.environ.get(defaults.ENV_BINARY)
    if override:
        log.debug("Using scanner binary from %s: %s", defaults.ENV_BINARY, override)
        return Path(override)

    exe = defaults.WINDOWS_BINARY_NAME if os_name == "windows" else defaults.BINARY_NAME
    root = Path(bin_dir) if bin_dir is not None else defaults.BIN_DIR
    return root / f"{os_name}_{arch}" / exe
