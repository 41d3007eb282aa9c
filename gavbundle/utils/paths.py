# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path utilities for gavbundle.

Project names in the batch config are joined onto the projects directory, so
they must not be able to walk out of it.
"""

from pathlib import Path


def validate_path_within(target: Path, root: Path) -> Path:
    """
    Make sure a path doesn't escape `root`.

    Both paths are resolved before comparing, so `../../etc` style names get
    caught.

    Args:
        target: The path to validate.
        root: The directory it must stay inside.

    Returns:
        The resolved absolute path if it's safe.

    Raises:
        ValueError: If the path escapes the root.
    """
    resolved_target = target.resolve()
    resolved_root = root.resolve()

    if resolved_target != resolved_root and resolved_root not in resolved_target.parents:
        raise ValueError(
            f"Path '{target}' resolves to '{resolved_target}' which is outside "
            f"'{resolved_root}'. This is not allowed."
        )

    return resolved_target
