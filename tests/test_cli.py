import shutil

import pytest
from pydicom import Dataset
from pydicom.dataset import FileMetaDataset
from pydicom.uid import ExplicitVRLittleEndian, generate_uid

from dicom_client.cli.config import main
from dicom_client.config import CLIENT_CONFIG_ENV, PACS_CONFIG_ENV, SERVICE_URL_ENV

from tests.conftest import RESOURCE_DIR


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr('dicom_client.cli.config.configure_logging', lambda **kwargs: None)


def _use_sample_resources(monkeypatch):
    monkeypatch.setenv(CLIENT_CONFIG_ENV, str(RESOURCE_DIR / 'DicomClientConfig.xml'))
    monkeypatch.setenv(PACS_CONFIG_ENV, str(RESOURCE_DIR / 'PACSConfig.xml'))


def _write_dicom(path):
    meta = FileMetaDataset()
    meta.MediaStorageSOPClassUID = '1.2.840.10008.5.1.4.1.1.2'
    meta.MediaStorageSOPInstanceUID = generate_uid()
    meta.TransferSyntaxUID = ExplicitVRLittleEndian
    dataset = Dataset()
    dataset.file_meta = meta
    dataset.SOPClassUID = meta.MediaStorageSOPClassUID
    dataset.SOPInstanceUID = meta.MediaStorageSOPInstanceUID
    dataset.PatientName = 'Zyxwvut^Qrstuv'
    dataset.PatientID = 'MRN98765'
    dataset.save_as(str(path), enforce_file_format=True)


def test_prints_sample_configuration(monkeypatch, capsys):
    _use_sample_resources(monkeypatch)

    assert main([]) == 0

    out = capsys.readouterr().out
    assert 'service_url: https://dicom.example.org/dicom' in out
    assert 'root_uid: 1.2.246.352.70.2.1.160.3' in out
    assert 'SiteCreator0011' in out
    assert 'SiteCreator0019' in out
    assert 'identity: DICOMCLIENT@localhost:4104' in out
    assert 'pacs: ARCHIVE@pacs.example.org:104 (Main archive)' in out
    assert 'ReferencedPatientSequence' not in out


def test_sample_resources_are_the_fallback(tmp_path, capsys):
    shutil.copytree(RESOURCE_DIR, tmp_path / 'resources')

    assert main([]) == 0
    assert 'identity: DICOMCLIENT@localhost:4104' in capsys.readouterr().out


def test_missing_configuration_fails():
    assert main([]) == 1


def test_show_config_only(monkeypatch, capsys):
    monkeypatch.setenv(CLIENT_CONFIG_ENV, '/some/where/DicomClientConfig.xml')

    assert main(['--show-config']) == 0

    out = capsys.readouterr().out
    assert '/some/where/DicomClientConfig.xml' in out
    assert 'Client Configuration' not in out


def test_token_replacements_for_dicom_file(monkeypatch, capsys, tmp_path):
    _use_sample_resources(monkeypatch)
    dicom_file = tmp_path / 'image.dcm'
    _write_dicom(dicom_file)

    assert main(['--dicom-file', str(dicom_file), '--aggressive']) == 0

    out = capsys.readouterr().out
    assert "zyxwvut -> ''" in out
    assert "qrstuv -> ''" in out
    assert "mrn98765 -> 'ID'" in out


def test_show_config_hides_service_url(monkeypatch, capsys):
    monkeypatch.setenv(SERVICE_URL_ENV, 'http://private-host:8080')

    assert main(['--show-config']) == 0

    out = capsys.readouterr().out
    assert 'service_url_override: set' in out
    assert 'private-host' not in out


def test_show_config_service_url_unset(capsys):
    assert main(['--show-config']) == 0

    assert 'service_url_override: unset' in capsys.readouterr().out


def test_aggressive_can_be_turned_off(monkeypatch, capsys, tmp_path):
    _use_sample_resources(monkeypatch)
    monkeypatch.setattr('dicom_client.cli.config.DEFAULT_AGGRESSIVE_ANONYMIZE', True)
    dicom_file = tmp_path / 'image.dcm'
    _write_dicom(dicom_file)

    assert main(['--dicom-file', str(dicom_file), '--no-aggressive']) == 0
    assert 'zyxwvut' not in capsys.readouterr().out

    assert main(['--dicom-file', str(dicom_file)]) == 0
    assert "zyxwvut -> ''" in capsys.readouterr().out
