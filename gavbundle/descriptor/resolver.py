# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Coordinate resolution from project descriptors.

Only the root element's direct children count, so a `<groupId>` nested in
`<dependencies>` or `<parent>` can never be mistaken for the project's own.
`groupId` and `version` fall back one level to the `<parent>` block;
`artifactId` is never inherited.
"""

from pathlib import Path
from typing import Optional, Protocol
from xml.etree.ElementTree import Element

from gavbundle.artifacts.models import Coordinates
from gavbundle.descriptor.reader import read_descriptor
from gavbundle.logging.logger import get_logger
from gavbundle.release.exceptions import DescriptorInvalidError, MissingCoordinateError

logger = get_logger(__name__)


class CoordinateResolver(Protocol):
    def resolve(self, descriptor_path: Path) -> Coordinates: ...


def _local_name(tag: str) -> str:
    return tag.rsplit(":", 1)[-1]


def _child(parent: Element, name: str) -> Optional[Element]:
    for element in parent:
        if _local_name(element.tag) == name:
            return element
    return None


def _child_text(parent: Optional[Element], name: str) -> str:
    if parent is None:
        return ""
    element = _child(parent, name)
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


class PomCoordinateResolver:
    """Reads coordinates from a pom.xml-style descriptor."""

    def resolve(self, descriptor_path: Path) -> Coordinates:
        """
        Extract (groupId, artifactId, version) from a descriptor.

        Raises:
            DescriptorInvalidError: Unreadable or malformed descriptor, or
                coordinates that cannot form a repository path.
            MissingCoordinateError: A field is still empty after the parent fallback.
        """
        root = read_descriptor(descriptor_path)

        group_id = _child_text(root, "groupId")
        artifact_id = _child_text(root, "artifactId")
        version = _child_text(root, "version")

        parent = _child(root, "parent")
        if not group_id:
            group_id = _child_text(parent, "groupId")
        if not version:
            version = _child_text(parent, "version")

        for field_name, value in (
            ("groupId", group_id),
            ("artifactId", artifact_id),
            ("version", version),
        ):
            if not value:
                raise MissingCoordinateError(field_name, descriptor_path)

        try:
            coordinates = Coordinates(group_id, artifact_id, version)
        except ValueError as err:
            raise DescriptorInvalidError(f"Invalid coordinates in descriptor {descriptor_path}: {err}") from err

        logger.debug(
            "Resolved coordinates",
            extra={"descriptor": str(descriptor_path), "coordinates": str(coordinates)},
        )
        return coordinates
