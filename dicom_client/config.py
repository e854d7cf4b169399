#!/usr/bin/env python
"""
Configuration module for the DICOM client

Contains the configuration file names, the candidate file search lists and
the settings that can be overridden with environment variables
"""

import os

# Helper function to get config values from environment variables with fallbacks
def get_env_or_default(env_name, default_value):
    """Get environment variable value or return default if not set"""
    return os.environ.get(env_name, default_value)

# Configuration document names
CLIENT_CONFIG_FILE_NAME = 'DicomClientConfig.xml'
PACS_CONFIG_FILE_NAME = 'PACSConfig.xml'

# Directory holding the fallback copies of the configuration documents
RESOURCE_DIR = 'resources'

# Environment variables that point at explicit configuration documents
CLIENT_CONFIG_ENV = 'DICOM_CLIENT_CONFIG'
PACS_CONFIG_ENV = 'DICOM_CLIENT_PACS_CONFIG'

# Mostly used in development to point the client at a private server
SERVICE_URL_ENV = 'DICOM_CLIENT_SERVICE_URL'

DEFAULT_LOG_LEVEL = get_env_or_default('DICOM_CLIENT_LOG_LEVEL', 'INFO')
DEFAULT_LOG_FILE = get_env_or_default('DICOM_CLIENT_LOG_FILE', None)
DEFAULT_AGGRESSIVE_ANONYMIZE = get_env_or_default('DICOM_CLIENT_AGGRESSIVE_ANONYMIZE', 'false').lower() == 'true'


def client_config_candidates():
    """Ordered list of files that may hold the client configuration"""
    return [
        get_env_or_default(CLIENT_CONFIG_ENV, None),
        CLIENT_CONFIG_FILE_NAME,
        os.path.join(RESOURCE_DIR, CLIENT_CONFIG_FILE_NAME),
    ]


def pacs_config_candidates():
    """Ordered list of files that may hold the PACS registry"""
    return [
        get_env_or_default(PACS_CONFIG_ENV, None),
        PACS_CONFIG_FILE_NAME,
        os.path.join(RESOURCE_DIR, PACS_CONFIG_FILE_NAME),
    ]


def get_service_url_override():
    """Service URL forced through the environment, or None"""
    return get_env_or_default(SERVICE_URL_ENV, None)


# Helper functions for configuration
def get_config_dict():
    """Return a dictionary with all environment level configuration values"""
    return {
        'client_config_candidates': client_config_candidates(),
        'pacs_config_candidates': pacs_config_candidates(),
        'service_url_override': get_service_url_override(),
        'log_level': DEFAULT_LOG_LEVEL,
        'log_file': DEFAULT_LOG_FILE,
        'aggressive_anonymize': DEFAULT_AGGRESSIVE_ANONYMIZE,
    }

def print_config():
    """Print current configuration values"""
    config = get_config_dict()
    print("\nCurrent Configuration:")
    print("======================")
    for key, value in config.items():
        if key.endswith('_candidates'):
            value = ', '.join(str(candidate) for candidate in value if candidate)
        if key == 'service_url_override':
            value = 'set' if value else 'unset'
        print(f"{key}: {value}")
    print("======================\n")
