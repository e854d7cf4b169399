"""
DICOM Client Utilities Package
"""

from .logging_config import configure_logging

__all__ = ['configure_logging']
