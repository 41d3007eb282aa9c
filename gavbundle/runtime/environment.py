# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Interpreter gate and the machine snapshot carried by the startup record and
`gavbundle info`.
"""

import platform
import sys
from dataclasses import dataclass
from typing import Optional

MINIMUM_PYTHON: tuple[int, int] = (3, 11)


@dataclass(frozen=True)
class SystemInfo:
    python_version: str
    platform: str
    architecture: str
    hostname: str


def check_minimum_python(version_info: Optional[tuple[int, ...]] = None) -> None:
    """
    Raise RuntimeError when the interpreter is older than MINIMUM_PYTHON.

    `version_info` defaults to the running interpreter's `sys.version_info`.
    """
    current = tuple(version_info if version_info is not None else sys.version_info)[:2]
    if current < MINIMUM_PYTHON:
        required = ".".join(str(part) for part in MINIMUM_PYTHON)
        found = ".".join(str(part) for part in current)
        raise RuntimeError(f"gavbundle requires Python >= {required}, found {found}")


def get_system_info() -> SystemInfo:
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        hostname=platform.node(),
    )
