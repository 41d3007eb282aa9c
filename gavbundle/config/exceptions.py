# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Custom exceptions for the configuration system.

We keep these separate so that CLI and other layers can catch config-specific
failures without importing the entire config machinery. Every error here is
raised before any bundling work starts.
"""


class ConfigError(Exception):
    """Base for all configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when a config file cannot be read from disk or parsed as YAML."""


class ConfigValidationError(ConfigError):
    """
    Raised when a config file parses fine but fails schema validation.
    This covers missing required fields, type mismatches, unknown keys,
    unsupported digest algorithms and empty project lists.
    """


class UnsupportedAlgorithmError(ConfigError):
    """Raised when a checksum is requested under a digest name we don't support."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"Unsupported checksum algorithm: {algorithm}")
        self.algorithm = algorithm
