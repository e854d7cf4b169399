#!/usr/bin/env python
"""
DICOM attribute dictionary

Wraps the pydicom data dictionary and layers the private tags declared in
the client configuration on top of it, so that configured private tags can
be looked up by name like any standard attribute.
"""

import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

from pydicom import datadict
from pydicom.tag import BaseTag, Tag

logger = logging.getLogger('dicom_client.dictionary')

SEQUENCE_VR = 'SQ'


def is_sequence_vr(vr: Optional[str]) -> bool:
    """True if the value representation is a sequence of items"""
    return vr == SEQUENCE_VR


class DicomDictionary:
    """
    Resolve attributes by symbolic name and describe them by tag

    Parameters:
    -----------
    private_tags : iterable of PrivateTag, optional
        Site specific tags to add to the standard dictionary
    """

    def __init__(self, private_tags: Optional[Iterable] = None):
        self._private_by_name: Dict[str, object] = {}
        self._private_by_tag: Dict[BaseTag, object] = {}
        for private_tag in private_tags or []:
            self._private_by_name[private_tag.name] = private_tag
            self._private_by_tag[private_tag.tag] = private_tag
        if self._private_by_tag:
            logger.debug(f"Dictionary extended with {len(self._private_by_tag)} private tags")

    def with_private_tags(self, private_tags: Iterable) -> 'DicomDictionary':
        """New dictionary holding these private tags in addition to the current ones"""
        return DicomDictionary(list(self._private_by_tag.values()) + list(private_tags))

    def tag_for_name(self, name: str) -> Optional[BaseTag]:
        """Tag for a symbolic attribute name such as 'PatientName', or None"""
        if not name:
            return None
        private_tag = self._private_by_name.get(name)
        if private_tag is not None:
            return private_tag.tag
        tag = datadict.tag_for_keyword(name)
        return Tag(tag) if tag is not None else None

    def vr_for_tag(self, tag) -> Optional[str]:
        """Value representation of a tag, or None if the tag is unknown"""
        tag = Tag(tag)
        private_tag = self._private_by_tag.get(tag)
        if private_tag is not None:
            return private_tag.vr
        try:
            return datadict.dictionary_VR(tag)
        except KeyError:
            return None

    def full_name_for_tag(self, tag) -> Optional[str]:
        """Human readable name of a tag, such as "Patient's Name", or None"""
        tag = Tag(tag)
        private_tag = self._private_by_tag.get(tag)
        if private_tag is not None:
            return private_tag.full_name
        try:
            return datadict.dictionary_description(tag)
        except KeyError:
            return None

    def tags(self) -> Iterator[BaseTag]:
        """Every tag in the dictionary, standard tags first"""
        for tag in datadict.DicomDictionary:
            yield Tag(tag)
        yield from self._private_by_tag

    def iter_full_names(self) -> Iterator[Tuple[BaseTag, str]]:
        """(tag, full name) for every tag that has a name"""
        for tag in self.tags():
            full_name = self.full_name_for_tag(tag)
            if full_name:
                yield tag, full_name
