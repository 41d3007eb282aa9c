# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

These are the only exit codes the CLI uses:
  USER_ERROR        bad invocation (missing --config, unknown bundle path)
  CONFIG_ERROR      config file unreadable or invalid, missing credentials
  RUNTIME_ERROR     signing, archive I/O or publishing failed
  VALIDATION_ERROR  descriptor problems, missing required files, bad bundle
"""

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
VALIDATION_ERROR: int = 4
