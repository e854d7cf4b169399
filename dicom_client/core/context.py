#!/usr/bin/env python
"""
Configuration context

Created once when the program starts and handed to everything that needs
configuration.  Refreshing gives a new context; holders of the old one keep
a consistent, if stale, view.
"""

import logging
from typing import Optional

from dicom_client.core.client_config import ClientConfig
from dicom_client.core.dictionary import DicomDictionary
from dicom_client.core.pacs_config import PacsConfig
from dicom_client.core.store import ConfigStore

logger = logging.getLogger('dicom_client.context')


class ConfigContext:
    """Client and PACS configuration of one program run"""

    def __init__(self, client_store: Optional[ConfigStore] = None, pacs_store: Optional[ConfigStore] = None,
                 dictionary: Optional[DicomDictionary] = None):
        self.client_store = client_store or ConfigStore.for_client()
        self.pacs_store = pacs_store or ConfigStore.for_pacs()
        self.base_dictionary = dictionary or DicomDictionary()
        self._client = None
        self._pacs = None

    @property
    def client(self) -> ClientConfig:
        if self._client is None:
            self._client = ClientConfig(self.client_store, self.base_dictionary)
        return self._client

    @property
    def pacs(self) -> PacsConfig:
        if self._pacs is None:
            self._pacs = PacsConfig(self.pacs_store)
        return self._pacs

    def refresh(self) -> 'ConfigContext':
        """New context with both documents read again"""
        logger.info("Refreshing configuration context")
        return ConfigContext(self.client_store.refresh(), self.pacs_store.refresh(), self.base_dictionary)
