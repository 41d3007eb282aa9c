# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Hardened reader for project descriptors (pom.xml).

Descriptors come from the projects being published, so they are treated as
untrusted input. The reader drives expat directly and feeds an ElementTree
TreeBuilder, which lets us pin down the entity handling that
`xml.etree.ElementTree.parse` leaves at its defaults:

  - parameter entities are never parsed, so an external DTD subset is never
    requested
  - external general entity references are accepted and dropped, so the
    document parses as if the reference were absent
  - entities skipped because their declaration lives in an unread DTD are
    dropped the same way

Nothing is ever fetched from outside the file. Namespace processing is off;
element names are reduced to their local part by the resolver.
"""

from pathlib import Path
from xml.etree.ElementTree import Element, TreeBuilder
from xml.parsers import expat

from gavbundle.release.exceptions import DescriptorInvalidError


def _ignore_external_entity(context: str, base: str, system_id: str, public_id: str) -> int:
    # Non-zero tells expat the reference was handled; nothing is loaded.
    return 1


def _ignore_skipped_entity(name: str, is_parameter_entity: bool) -> None:
    return None


def _build_parser(builder: TreeBuilder) -> "expat.XMLParserType":
    parser = expat.ParserCreate()
    parser.SetParamEntityParsing(expat.XML_PARAM_ENTITY_PARSING_NEVER)
    parser.ExternalEntityRefHandler = _ignore_external_entity
    parser.SkippedEntityHandler = _ignore_skipped_entity
    parser.StartElementHandler = builder.start
    parser.EndElementHandler = builder.end
    parser.CharacterDataHandler = builder.data
    parser.buffer_text = True
    return parser


def read_descriptor(descriptor_path: Path) -> Element:
    """
    Parse a descriptor file into an Element tree.

    Args:
        descriptor_path: Path to the XML descriptor.

    Returns:
        The root element.

    Raises:
        DescriptorInvalidError: If the file can't be read or isn't well-formed XML.
    """
    builder = TreeBuilder()
    parser = _build_parser(builder)

    try:
        with open(descriptor_path, "rb") as handle:
            parser.ParseFile(handle)
    except OSError as err:
        raise DescriptorInvalidError(f"Cannot read descriptor {descriptor_path}: {err}") from err
    except expat.ExpatError as err:
        raise DescriptorInvalidError(f"Invalid XML in descriptor {descriptor_path}: {err}") from err

    return builder.close()
