#!/usr/bin/env python
"""
Helpers for reading values out of parsed configuration documents

Paths are '/' separated element names.  When the source is a whole document
the first part of the path names the root element; when the source is an
element the path is relative to it.  A '*' part matches every child element.
"""

from typing import List, Optional, Union
from xml.etree import ElementTree

from dicom_client.core.errors import ConfigValueError

Source = Union[ElementTree.ElementTree, ElementTree.Element]


def _walk(source: Optional[Source], path: str) -> List[ElementTree.Element]:
    if source is None:
        raise ConfigValueError(path, 'no configuration document is loaded')

    parts = [part for part in path.split('/') if part]
    if isinstance(source, ElementTree.ElementTree):
        root = source.getroot()
        if not parts or parts[0] != root.tag:
            return []
        nodes = [root]
        parts = parts[1:]
    else:
        nodes = [source]

    for part in parts:
        nodes = [child for node in nodes for child in node
                 if part == '*' or child.tag == part]
    return nodes


def get_multiple_nodes(source: Optional[Source], path: str) -> List[ElementTree.Element]:
    """
    Get every element matching a path, in document order

    Raises ConfigValueError only when there is no document at all; a path
    that matches nothing gives an empty list.
    """
    return _walk(source, path)


def get_single_node(source: Optional[Source], path: str) -> ElementTree.Element:
    """Get the first element matching a path"""
    nodes = _walk(source, path)
    if not nodes:
        raise ConfigValueError(path, 'element not found')
    return nodes[0]


def get_value(source: Optional[Source], path: str) -> str:
    """Get the stripped text content of the first element matching a path"""
    node = get_single_node(source, path)
    if node.text is None:
        raise ConfigValueError(path, 'element has no text')
    return node.text.strip()


def get_text(node: ElementTree.Element, default: Optional[str] = None) -> Optional[str]:
    """Text content of an element, or the default when it has none"""
    if node.text is None:
        return default
    return node.text.strip()


def get_attribute(node: ElementTree.Element, name: str, default: Optional[str] = None) -> Optional[str]:
    """Value of an element attribute, or the default when it is not set"""
    return node.get(name, default)


def get_field(node: ElementTree.Element, name: str) -> Optional[str]:
    """
    Value given either as an attribute or as a child element of a node

    The attribute wins when both are present.
    """
    value = node.get(name)
    if value is not None:
        return value.strip()
    child = node.find(name)
    if child is not None:
        return get_text(child)
    return None
