from pathlib import Path

import pytest
from pydicom.tag import Tag

from dicom_client.config import CLIENT_CONFIG_ENV, PACS_CONFIG_ENV, SERVICE_URL_ENV
from dicom_client.core.client_config import ClientConfig
from dicom_client.core.store import ConfigStore

RESOURCE_DIR = Path(__file__).resolve().parent.parent / 'resources'


class FakeDictionary:
    """Small dictionary so reserved words are predictable"""

    ENTRIES = {
        'PatientName': (Tag(0x0010, 0x0010), 'PN', "Patient's Name"),
        'PatientID': (Tag(0x0010, 0x0020), 'LO', 'Patient ID'),
        'PatientComments': (Tag(0x0010, 0x4000), 'LT', 'Patient Comments'),
        'InstitutionName': (Tag(0x0008, 0x0080), 'LO', 'Institution Name'),
        'ReferencedPatientSequence': (Tag(0x0008, 0x1120), 'SQ', 'Referenced Patient Sequence'),
    }

    def __init__(self):
        self._by_tag = {tag: (vr, full_name) for tag, vr, full_name in self.ENTRIES.values()}

    def with_private_tags(self, private_tags):
        return self

    def tag_for_name(self, name):
        entry = self.ENTRIES.get(name)
        return entry[0] if entry else None

    def vr_for_tag(self, tag):
        entry = self._by_tag.get(Tag(tag))
        return entry[0] if entry else None

    def full_name_for_tag(self, tag):
        entry = self._by_tag.get(Tag(tag))
        return entry[1] if entry else None

    def iter_full_names(self):
        for tag, (_, full_name) in self._by_tag.items():
            yield tag, full_name


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep tests away from real configuration files and overrides"""
    for name in (CLIENT_CONFIG_ENV, PACS_CONFIG_ENV, SERVICE_URL_ENV):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def write_xml(tmp_path):
    """Write an XML document and return its path as a string"""
    def _write(body, name='config.xml'):
        path = tmp_path / name
        path.write_text('<?xml version="1.0" encoding="UTF-8"?>\n' + body, encoding='utf-8')
        return str(path)
    return _write


@pytest.fixture
def fake_dictionary():
    return FakeDictionary()


@pytest.fixture
def make_client(write_xml, fake_dictionary):
    """ClientConfig over a document holding the given child elements"""
    def _make(children='', dictionary=None):
        path = write_xml(f'<DicomClientConfig>{children}</DicomClientConfig>', 'DicomClientConfig.xml')
        return ClientConfig(ConfigStore([path]), dictionary or fake_dictionary)
    return _make


@pytest.fixture
def missing_client(tmp_path, fake_dictionary):
    """ClientConfig for which no document could be loaded"""
    return ClientConfig(ConfigStore([str(tmp_path / 'absent.xml')]), fake_dictionary)
