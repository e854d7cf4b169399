"""
Command line interfaces for the DICOM client configuration
"""
