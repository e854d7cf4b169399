"""
DICOM Client Core Package

Loading of the configuration documents and the rules derived from them
"""

from .client_config import ClientConfig
from .context import ConfigContext
from .dictionary import DicomDictionary
from .errors import ConfigurationError, ConfigValueError, UnknownAttributeError
from .pacs_config import PacsConfig, PacsEntry
from .private_tags import PrivateTag
from .store import ConfigStore

__all__ = [
    'ClientConfig',
    'ConfigContext',
    'ConfigStore',
    'ConfigurationError',
    'ConfigValueError',
    'DicomDictionary',
    'PacsConfig',
    'PacsEntry',
    'PrivateTag',
    'UnknownAttributeError',
]
