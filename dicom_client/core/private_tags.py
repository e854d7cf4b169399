#!/usr/bin/env python
"""
Private tag declarations

Private tags are declared in the client configuration, one element per tag:

    <PrivateTagList>
        <VarianBeamName group="3249" element="1010" vr="LO" fullName="Varian Beam Name"/>
        <SiteTag group="0011:0019:2" element="0010" vr="LO" fullName="Site Tag"/>
    </PrivateTagList>

A group of the form first:last[:increment] (hex) declares one tag per group
in the inclusive range.  The tags made from a range get the 4 hex digit group
appended to their name and full name.
"""

import logging
from typing import List, Optional
from xml.etree import ElementTree

from pydicom.tag import BaseTag, Tag
from pydicom.valuerep import VR

from dicom_client.core.errors import ConfigurationError
from dicom_client.core.xml_utils import get_attribute, get_multiple_nodes

logger = logging.getLogger('dicom_client.private_tags')

PRIVATE_TAG_LIST_PATH = 'DicomClientConfig/PrivateTagList/*'

RANGE_SEPARATOR = ':'


def _parse_hex(text: Optional[str], field: str) -> int:
    if text is None or not text.strip():
        raise ValueError(f"missing {field}")
    value = int(text.strip(), 16)
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{field} {text} is not a 16 bit value")
    return value


def _required(node: ElementTree.Element, name: str) -> str:
    value = get_attribute(node, name)
    if value is None:
        raise ValueError(f"missing {name} attribute")
    return value


def _parse_vr(node: ElementTree.Element) -> str:
    text = _required(node, 'vr').strip()
    try:
        return VR(text).value
    except ValueError:
        raise ValueError(f"unknown value representation '{text}'") from None


class PrivateTag:
    """A single private data element definition"""

    def __init__(self, group: int, element: int, value_representation, name: str, full_name: str):
        if isinstance(value_representation, str):
            value_representation = value_representation.encode('ascii')
        self.group = group
        self.element = element
        self.value_representation = value_representation
        self.name = name
        self.full_name = full_name

    @classmethod
    def from_node(cls, node: ElementTree.Element) -> 'PrivateTag':
        """Build a tag from a declaration naming a single group"""
        return cls(
            _parse_hex(get_attribute(node, 'group'), 'group'),
            _parse_hex(get_attribute(node, 'element'), 'element'),
            _parse_vr(node),
            node.tag,
            _required(node, 'fullName'),
        )

    @property
    def tag(self) -> BaseTag:
        return Tag(self.group, self.element)

    @property
    def vr(self) -> str:
        return self.value_representation.decode('ascii')

    def __eq__(self, other):
        if not isinstance(other, PrivateTag):
            return NotImplemented
        return (self.group, self.element, self.value_representation, self.name, self.full_name) == \
            (other.group, other.element, other.value_representation, other.name, other.full_name)

    def __hash__(self):
        return hash((self.group, self.element, self.name))

    def __repr__(self):
        return f"PrivateTag({self.group:04x},{self.element:04x} {self.vr} {self.name!r} {self.full_name!r})"


def expand_range(node: ElementTree.Element) -> List[PrivateTag]:
    """
    Build one tag per group for a declaration of the form first:last[:increment]

    Raises ValueError if the declaration can not be interpreted.
    """
    parts = get_attribute(node, 'group').split(RANGE_SEPARATOR)
    if len(parts) not in (2, 3):
        raise ValueError(f"group range {node.get('group')} must be first:last or first:last:increment")

    first_group = _parse_hex(parts[0], 'first group')
    last_group = _parse_hex(parts[1], 'last group')
    increment = _parse_hex(parts[2], 'increment') if len(parts) == 3 else 1
    if increment < 1:
        raise ValueError(f"group range {node.get('group')} has an increment of zero")

    element = _parse_hex(get_attribute(node, 'element'), 'element')
    value_representation = _parse_vr(node)
    name = node.tag
    full_name = _required(node, 'fullName')

    tags = []
    for group in range(first_group, last_group + 1, increment):
        suffix = f"{group:04x}"
        tags.append(PrivateTag(group, element, value_representation, name + suffix, f"{full_name} {suffix}"))
    return tags


def parse_declaration(node: ElementTree.Element) -> List[PrivateTag]:
    """All the tags described by one declaration element"""
    group = get_attribute(node, 'group') or ''
    if RANGE_SEPARATOR in group:
        return expand_range(node)
    return [PrivateTag.from_node(node)]


def build_private_tag_list(document) -> List[PrivateTag]:
    """
    Interpret every private tag declaration in the client configuration

    A declaration that can not be interpreted is logged and skipped.  A tag
    that was already declared earlier in the document is not added again.
    """
    try:
        nodes = get_multiple_nodes(document, PRIVATE_TAG_LIST_PATH)
    except ConfigurationError as e:
        logger.warning(f"Problem interpreting custom tags: {e}")
        return []

    private_tags = []
    seen = set()
    for node in nodes:
        try:
            declared = parse_declaration(node)
        except ValueError as e:
            logger.warning(f"Ignoring private tag declaration {node.tag}: {e}")
            continue
        for private_tag in declared:
            if private_tag.tag in seen:
                logger.warning(f"Ignoring duplicate private tag {private_tag!r}")
                continue
            seen.add(private_tag.tag)
            private_tags.append(private_tag)

    logger.info(f"Loaded {len(private_tags)} private tags")
    return private_tags
