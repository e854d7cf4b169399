import logging

from dicom_client.config import PACS_CONFIG_ENV
from dicom_client.core.pacs_config import PacsConfig, PacsEntry
from dicom_client.core.store import ConfigStore

REGISTRY = '''
<PacsConfiguration>
    <Identity>
        <PACS AETitle="DICOMCLIENT" Host="localhost" Port="4104"/>
    </Identity>
    <PacsList>
        <PACS AETitle="ARCHIVE" Host="pacs.example.org" Port="104" Description="Main archive"/>
        <PACS>
            <AETitle>PLANNING</AETitle>
            <Host>planning.example.org</Host>
            <Port>11112</Port>
        </PACS>
    </PacsList>
</PacsConfiguration>
'''


def _pacs_config(write_xml, body):
    return PacsConfig(ConfigStore([write_xml(body, 'PACSConfig.xml')]))


def test_identity_and_pacs_list(write_xml):
    pacs = _pacs_config(write_xml, REGISTRY)

    assert pacs.get_identity() == PacsEntry('DICOMCLIENT', 'localhost', 4104)
    assert pacs.get_pacs_list() == [
        PacsEntry('ARCHIVE', 'pacs.example.org', 104, 'Main archive'),
        PacsEntry('PLANNING', 'planning.example.org', 11112),
    ]


def test_no_document_gives_none(tmp_path):
    pacs = PacsConfig(ConfigStore([str(tmp_path / 'absent.xml')]))

    assert pacs.get_identity() is None
    assert pacs.get_pacs_list() is None


def test_document_without_peers_gives_empty_list(write_xml):
    pacs = _pacs_config(write_xml, '<PacsConfiguration><Identity><PACS AETitle="ME" Host="h" Port="1"/></Identity></PacsConfiguration>')

    assert pacs.get_identity().ae_title == 'ME'
    assert pacs.get_pacs_list() == []


def test_missing_identity(write_xml, caplog):
    pacs = _pacs_config(write_xml, '<PacsConfiguration><PacsList><PACS AETitle="A" Host="h" Port="1"/></PacsList></PacsConfiguration>')

    assert pacs.get_identity() is None
    assert len(pacs.get_pacs_list()) == 1
    assert [record for record in caplog.records if record.levelno == logging.ERROR]


def test_bad_entry_is_skipped(write_xml):
    pacs = _pacs_config(write_xml, '''
        <PacsConfiguration><PacsList>
            <PACS AETitle="A" Host="h" Port="not a port"/>
            <PACS AETitle="B" Port="104"/>
            <PACS AETitle="C" Host="h" Port="104"/>
        </PacsList></PacsConfiguration>''')

    assert [entry.ae_title for entry in pacs.get_pacs_list()] == ['C']


def test_find_pacs(write_xml):
    pacs = _pacs_config(write_xml, REGISTRY)

    assert pacs.find_pacs(' planning ').host == 'planning.example.org'
    assert pacs.find_pacs('UNKNOWN') is None


def test_find_pacs_without_document(tmp_path):
    pacs = PacsConfig(ConfigStore([str(tmp_path / 'absent.xml')]))

    assert pacs.find_pacs('ARCHIVE') is None


def test_default_store_uses_environment(monkeypatch, write_xml):
    monkeypatch.setenv(PACS_CONFIG_ENV, write_xml(REGISTRY, 'registry.xml'))

    assert PacsConfig().get_identity().ae_title == 'DICOMCLIENT'


def test_refresh(write_xml):
    pacs = _pacs_config(write_xml, REGISTRY)

    write_xml('<PacsConfiguration><PacsList/></PacsConfiguration>', 'PACSConfig.xml')
    refreshed = pacs.refresh()

    assert len(pacs.get_pacs_list()) == 2
    assert refreshed.get_pacs_list() == []
    assert refreshed.get_identity() is None
