"""
DICOM Client Configuration

Resolves the runtime configuration of a DICOM client from candidate XML
documents and derives the anonymization, private tag, trust store and PACS
registry rules the client needs.
"""

__version__ = '1.0.0'
