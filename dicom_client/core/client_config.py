#!/usr/bin/env python
"""
Client Configuration

Settings and rules for the DICOM client read from the client configuration
document.  Most accessors never raise: a value that can not be read is
logged and replaced by a safe default.  The root UID is the exception since
there is no sensible value to make up for it.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Set

from pydicom import Dataset

from dicom_client.config import get_service_url_override
from dicom_client.core.anonymization import (
    build_anonymizing_replacement_list,
    build_reserved_words,
    build_token_replacements,
)
from dicom_client.core.dictionary import DicomDictionary
from dicom_client.core.errors import ConfigurationError, ConfigValueError
from dicom_client.core.private_tags import PrivateTag, build_private_tag_list
from dicom_client.core.store import ConfigStore
from dicom_client.core.xml_utils import get_multiple_nodes, get_text, get_value

logger = logging.getLogger('dicom_client.client_config')

ROOT = 'DicomClientConfig'
SERVICE_URL_PATH = f'{ROOT}/DicomServiceUrl'
SHOW_UPLOAD_HELP_PATH = f'{ROOT}/ShowUploadHelp'
ANON_PATIENT_ID_TEMPLATE_PATH = f'{ROOT}/AnonPatientIdTemplate'
KO_MANIFEST_DEFAULT_PATH = f'{ROOT}/KOManifestDefault'
ROOT_UID_PATH = f'{ROOT}/RootUid'
# Older configuration files use this name for the root UID
LEGACY_ROOT_UID_PATH = f'{ROOT}/RootGuid'
TRUST_STORE_PATH = f'{ROOT}/javax.net.ssl.trustStore'

TRUE_WORDS = ('true', 'yes')
FALSE_WORDS = ('f', 'false', 'no', '0')


class ClientConfig:
    """
    Configuration of the DICOM client

    Derived rule sets (reserved words, anonymization defaults, private tags)
    are built on first use and kept for the life of this object.  Use
    refresh() to get a new object built from a freshly read document.
    """

    def __init__(self, store: Optional[ConfigStore] = None, dictionary: Optional[DicomDictionary] = None):
        """
        Parameters:
        -----------
        store : ConfigStore, optional
            Store holding the client configuration document.  The default
            searches the standard client configuration locations.
        dictionary : DicomDictionary, optional
            Standard attribute dictionary.  The configured private tags are
            added to it for anonymization defaults.
        """
        self.store = store or ConfigStore.for_client()
        self.base_dictionary = dictionary or DicomDictionary()
        self._dictionary = None
        self._reserved_words = None
        self._anonymizing_replacement_list = None
        self._private_tag_list = None
        self._dictionary_lock = threading.Lock()
        self._reserved_words_lock = threading.Lock()
        self._replacement_list_lock = threading.Lock()
        self._private_tag_lock = threading.Lock()

    @property
    def document(self):
        return self.store.document

    def get_server_base_url(self) -> Optional[str]:
        """
        Get the base URL for the DICOM service with any terminating /'s removed

        The DICOM_CLIENT_SERVICE_URL environment variable takes precedence
        over the configuration file.
        """
        url = get_service_url_override()
        if url is None:
            try:
                url = get_value(self.document, SERVICE_URL_PATH)
            except ConfigurationError:
                url = None

        if url:
            url = url.rstrip('/')
            logger.info(f"Using DicomServiceUrl: {url}")
            return url
        logger.info("DicomServiceUrl is not configured.")
        return None

    def get_show_upload_capability(self) -> bool:
        """
        Whether the upload capability should be shown

        Defaults to showing it whenever the setting is missing or not
        understood.
        """
        try:
            text = get_value(self.document, SHOW_UPLOAD_HELP_PATH)
        except ConfigurationError as e:
            logger.error(f"get_show_upload_capability: Unable to read configuration: {e}")
            return True
        if text.lower() not in TRUE_WORDS:
            logger.info(f"ShowUploadHelp value '{text}' not recognized, showing upload capability")
        return True

    def get_anon_patient_id_template(self) -> Optional[str]:
        """Template that controls how new patient IDs are generated for anonymization"""
        try:
            return get_value(self.document, ANON_PATIENT_ID_TEMPLATE_PATH)
        except ConfigurationError as e:
            logger.error(f"get_anon_patient_id_template: Unable to read configuration: {e}")
            return None

    def get_ko_manifest_default(self) -> bool:
        """Default state for sending the KO manifest.  True unless explicitly turned off."""
        try:
            text = get_value(self.document, KO_MANIFEST_DEFAULT_PATH)
        except ConfigurationError:
            return True
        return text.lower() not in FALSE_WORDS

    def get_root_uid(self) -> str:
        """
        Root UID under which new UIDs are generated

        Raises:
        -------
        ConfigValueError
            If neither the current nor the legacy setting is present
        """
        try:
            return get_value(self.document, ROOT_UID_PATH)
        except ConfigValueError:
            return get_value(self.document, LEGACY_ROOT_UID_PATH)

    def get_trust_store_list(self) -> List[Path]:
        """Trust store files available for talking to the DICOM service"""
        try:
            nodes = get_multiple_nodes(self.document, TRUST_STORE_PATH)
        except ConfigurationError:
            logger.warning("Unable to parse list of trust stores.  You will not be able to communicate with the DICOM service.")
            return []
        return [Path(text) for text in (get_text(node) for node in nodes) if text]

    @property
    def dictionary(self) -> DicomDictionary:
        """The standard dictionary extended with the configured private tags"""
        with self._dictionary_lock:
            if self._dictionary is None:
                self._dictionary = self.base_dictionary.with_private_tags(self.get_private_tag_list())
            return self._dictionary

    def get_reserved_words(self) -> Set[str]:
        """Words that aggressive anonymization never replaces"""
        with self._reserved_words_lock:
            if self._reserved_words is None:
                self._reserved_words = build_reserved_words(self.document, self.base_dictionary)
            return self._reserved_words

    def get_aggressive_anonymization(self, dataset: Dataset, dictionary: Optional[DicomDictionary] = None,
                                     enabled: bool = True) -> Dict[str, str]:
        """
        Values that should be replaced for aggressive patient anonymization

        Parameters:
        -----------
        dataset : Dataset
            Attributes of the data being anonymized
        dictionary : DicomDictionary, optional
            Resolves the configured attribute names, defaults to self.dictionary
        enabled : bool
            Whether aggressive anonymization is turned on.  When off nothing
            is read and an empty map is returned.

        Returns:
        --------
        dict
            Lower case token -> replacement text, built fresh on every call
        """
        if not enabled:
            return {}
        return build_token_replacements(
            self.document,
            dataset,
            dictionary or self.dictionary,
            self.get_reserved_words(),
        )

    def get_anonymizing_replacement_list(self) -> Dataset:
        """Attributes to anonymize and their default replacement values"""
        with self._replacement_list_lock:
            if self._anonymizing_replacement_list is None:
                self._anonymizing_replacement_list = build_anonymizing_replacement_list(
                    self.document, self.dictionary)
            return self._anonymizing_replacement_list

    def get_private_tag_list(self) -> List[PrivateTag]:
        """Private tags declared in the configuration"""
        with self._private_tag_lock:
            if self._private_tag_list is None:
                self._private_tag_list = build_private_tag_list(self.document)
            return self._private_tag_list

    def refresh(self) -> 'ClientConfig':
        """New configuration built from a freshly read document"""
        return ClientConfig(self.store.refresh(), self.base_dictionary)
