# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for gavbundle.

One-time setup before any command does real work:
  1. Validate the environment (Python version)
  2. Point the package logger at the configured level and destination
  3. Log a startup record

Every command that loads a config goes through this first.
"""

from pathlib import Path
from typing import Optional

from gavbundle.config.schema import GlobalConfig
from gavbundle.logging.logger import configure_logging, get_logger
from gavbundle.runtime.environment import check_minimum_python, get_system_info


def bootstrap(config: GlobalConfig, log_level_override: Optional[str] = None) -> None:
    """
    Run the bootstrap sequence.

    Args:
        config: The validated global configuration.
        log_level_override: Level from the command line, wins over the config.
    """
    check_minimum_python()

    log_file = Path(config.log_file) if config.log_file is not None else None
    configure_logging(log_level_override or config.log_level, log_file=log_file)

    logger = get_logger("gavbundle.runtime")
    system_info = get_system_info()
    logger.info(
        "gavbundle bootstrap complete",
        extra={
            "project_name": config.project_name,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
        },
    )
