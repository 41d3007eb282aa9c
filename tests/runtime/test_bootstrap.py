# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime smoke tests: environment checks and the bootstrap sequence.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from gavbundle.config.schema import GlobalConfig
from gavbundle.logging.logger import PACKAGE_LOGGER_NAME, configure_logging
from gavbundle.runtime.bootstrap import bootstrap
from gavbundle.runtime.environment import check_minimum_python, get_system_info


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    yield
    configure_logging("INFO")


class TestEnvironment:
    def test_current_python_passes(self) -> None:
        check_minimum_python()

    def test_old_python_rejected(self) -> None:
        with pytest.raises(RuntimeError, match="requires Python >= 3.11, found 3.9"):
            check_minimum_python((3, 9, 18))

    def test_same_minor_passes(self) -> None:
        check_minimum_python((3, 11, 0))

    def test_system_info_is_populated(self) -> None:
        info = get_system_info()
        assert info.python_version
        assert info.platform


class TestBootstrap:
    def test_applies_config_level_and_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "release.log"
        config = GlobalConfig(
            config_version="1.0.0",
            project_name="bootstrap-test",
            log_level="DEBUG",
            log_file=str(log_file),
        )

        bootstrap(config)

        assert logging.getLogger(PACKAGE_LOGGER_NAME).level == logging.DEBUG
        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert records[-1]["msg"] == "gavbundle bootstrap complete"
        assert records[-1]["project_name"] == "bootstrap-test"

    def test_command_line_level_wins(self) -> None:
        bootstrap(GlobalConfig(config_version="1.0.0", log_level="DEBUG"), log_level_override="ERROR")
        assert logging.getLogger(PACKAGE_LOGGER_NAME).level == logging.ERROR
