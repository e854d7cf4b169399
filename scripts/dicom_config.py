#!/usr/bin/env python
"""
Script to display the resolved DICOM client configuration
"""

from dicom_client.cli.config import main

if __name__ == "__main__":
    exit(main())
