#!/usr/bin/env python
"""
Lazily loaded holder for one configuration document
"""

import logging
from typing import Callable, List, Optional, Sequence, Union
from xml.etree import ElementTree

from dicom_client.config import client_config_candidates, pacs_config_candidates
from dicom_client.core.loader import load_first_document

logger = logging.getLogger('dicom_client.store')

Candidates = Union[Sequence[Optional[str]], Callable[[], Sequence[Optional[str]]]]


class ConfigStore:
    """
    Owns the parsed document for one configuration domain

    The document is loaded on first access and kept until the store is
    replaced by refresh().  Two threads hitting the first access at the same
    time may both load the file; loads are idempotent so whichever result is
    stored last is as good as the other.
    """

    def __init__(self, candidates: Candidates, name: str = 'configuration'):
        """
        Parameters:
        -----------
        candidates : list or callable
            Candidate file paths, or a callable returning them.  A callable
            is re-evaluated on refresh so environment overrides are picked up.
        name : str
            Label used in log messages
        """
        self._candidate_source = candidates
        self.name = name
        self._document = None
        self._loaded = False

    @classmethod
    def for_client(cls) -> 'ConfigStore':
        """Store for the client configuration document"""
        return cls(client_config_candidates, 'client')

    @classmethod
    def for_pacs(cls) -> 'ConfigStore':
        """Store for the PACS registry document"""
        return cls(pacs_config_candidates, 'PACS')

    @property
    def candidates(self) -> List[Optional[str]]:
        if callable(self._candidate_source):
            return list(self._candidate_source())
        return list(self._candidate_source)

    @property
    def document(self) -> Optional[ElementTree.ElementTree]:
        """The parsed document, or None if no candidate could be loaded"""
        if not self._loaded:
            self._document = load_first_document(self.candidates)
            self._loaded = True
        return self._document

    @property
    def is_available(self) -> bool:
        return self.document is not None

    def refresh(self) -> 'ConfigStore':
        """
        Force the document to be read again

        Returns a new store that has already performed its load; the old
        store and anything derived from it are left untouched.
        """
        logger.info(f"Refreshing {self.name} configuration")
        store = ConfigStore(self._candidate_source, self.name)
        store.document
        return store
