#!/usr/bin/env python
"""
PACS Configuration

How this client identifies itself to other DICOM devices and the list of
remote PACS it knows about, as read from the PACS registry document:

    <PacsConfiguration>
        <Identity>
            <PACS AETitle="DICOMCLIENT" Host="localhost" Port="4104"/>
        </Identity>
        <PacsList>
            <PACS AETitle="ARCHIVE" Host="pacs.example.org" Port="104"/>
        </PacsList>
    </PacsConfiguration>

Each field may also be given as a child element of PACS.
"""

import logging
from typing import List, Optional
from xml.etree import ElementTree

from dicom_client.core.errors import ConfigurationError
from dicom_client.core.store import ConfigStore
from dicom_client.core.xml_utils import get_field, get_multiple_nodes, get_single_node

logger = logging.getLogger('dicom_client.pacs_config')

IDENTITY_PATH = 'PacsConfiguration/Identity/PACS'
PACS_LIST_PATH = 'PacsConfiguration/PacsList/PACS'


class PacsEntry:
    """Network identity of a DICOM application entity"""

    def __init__(self, ae_title: str, host: str, port: int, description: Optional[str] = None):
        self.ae_title = ae_title
        self.host = host
        self.port = port
        self.description = description

    @classmethod
    def from_node(cls, node: ElementTree.Element) -> 'PacsEntry':
        """
        Build an entry from a PACS element

        Raises ValueError if a required field is missing or the port is not
        a number.
        """
        ae_title = get_field(node, 'AETitle')
        host = get_field(node, 'Host')
        port = get_field(node, 'Port')
        for name, value in (('AETitle', ae_title), ('Host', host), ('Port', port)):
            if not value:
                raise ValueError(f"PACS entry is missing {name}")
        return cls(ae_title, host, int(port), get_field(node, 'Description'))

    def matches(self, ae_title: str) -> bool:
        return self.ae_title.upper() == ae_title.upper().strip()

    def __eq__(self, other):
        if not isinstance(other, PacsEntry):
            return NotImplemented
        return (self.ae_title, self.host, self.port, self.description) == \
            (other.ae_title, other.host, other.port, other.description)

    def __repr__(self):
        return f"PacsEntry({self.ae_title!r}, {self.host!r}, {self.port})"

    def __str__(self):
        return f"{self.ae_title}@{self.host}:{self.port}"


class PacsConfig:
    """
    PACS registry built from one loaded registry document

    Both the identity and the list are None when no registry document could
    be loaded, so callers can tell a missing registry from an empty one.
    """

    def __init__(self, store: Optional[ConfigStore] = None):
        """
        Parameters:
        -----------
        store : ConfigStore, optional
            Store holding the registry document.  The default searches the
            standard registry locations.
        """
        self.store = store or ConfigStore.for_pacs()
        self.identity: Optional[PacsEntry] = None
        self.pacs_list: Optional[List[PacsEntry]] = None
        self._resolve(self.store.document)

    def _resolve(self, document):
        if document is None:
            return

        try:
            self.identity = PacsEntry.from_node(get_single_node(document, IDENTITY_PATH))
        except (ConfigurationError, ValueError) as e:
            logger.error(f"Unable to determine the identity of this client: {e}")

        self.pacs_list = []
        for node in get_multiple_nodes(document, PACS_LIST_PATH):
            try:
                self.pacs_list.append(PacsEntry.from_node(node))
            except ValueError as e:
                logger.warning(f"Ignoring PACS entry: {e}")

        logger.info(f"PACS configuration loaded with {len(self.pacs_list)} entries")

    def get_identity(self) -> Optional[PacsEntry]:
        """How this program identifies itself to other PACS devices"""
        return self.identity

    def get_pacs_list(self) -> Optional[List[PacsEntry]]:
        """The list of PACS we know about"""
        return self.pacs_list

    def find_pacs(self, ae_title: str) -> Optional[PacsEntry]:
        """
        Look up a known PACS by AE title

        Parameters:
        -----------
        ae_title : str
            The AE title to look up, compared case insensitively

        Returns:
        --------
        PacsEntry or None
            The first matching entry, None if not found
        """
        for pacs in self.pacs_list or []:
            if pacs.matches(ae_title):
                logger.info(f"Found PACS configuration for '{ae_title}': {pacs.host}:{pacs.port}")
                return pacs
        logger.warning(f"No PACS configuration found for '{ae_title}'")
        return None

    def refresh(self) -> 'PacsConfig':
        """Force the PACS configuration to be re-read from the file"""
        return PacsConfig(self.store.refresh())
