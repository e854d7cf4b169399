#!/usr/bin/env python
"""
Command-line interface for inspecting the DICOM client configuration

Resolves the client and PACS configuration documents the same way the
client does and prints what was derived from them.
"""

import argparse
import logging

from pydicom import dcmread
from pydicom.errors import InvalidDicomError

from dicom_client.config import (
    DEFAULT_AGGRESSIVE_ANONYMIZE,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_LEVEL,
    print_config
)
from dicom_client.core.context import ConfigContext
from dicom_client.core.errors import ConfigurationError
from dicom_client.utils.logging_config import configure_logging

logger = logging.getLogger('dicom_client.cli.config')


def print_client_config(client):
    """Print the settings read from the client configuration"""
    print("\nClient Configuration:")
    print("=====================")
    print(f"service_url: {client.get_server_base_url()}")
    print(f"show_upload_capability: {client.get_show_upload_capability()}")
    print(f"anon_patient_id_template: {client.get_anon_patient_id_template()}")
    print(f"ko_manifest_default: {client.get_ko_manifest_default()}")
    try:
        print(f"root_uid: {client.get_root_uid()}")
    except ConfigurationError as e:
        print(f"root_uid: <not configured: {e}>")
    for trust_store in client.get_trust_store_list():
        print(f"trust_store: {trust_store}")
    for private_tag in client.get_private_tag_list():
        print(f"private_tag: ({private_tag.group:04x},{private_tag.element:04x}) {private_tag.vr} "
              f"{private_tag.name} \"{private_tag.full_name}\"")
    for element in client.get_anonymizing_replacement_list():
        print(f"anonymize_default: {element.keyword or element.tag} = '{element.value}'")
    print("=====================\n")


def print_pacs_config(pacs):
    """Print the identity of this client and the known PACS"""
    print("\nPACS Configuration:")
    print("===================")
    print(f"identity: {pacs.get_identity()}")
    pacs_list = pacs.get_pacs_list()
    if pacs_list is None:
        print("pacs: <no PACS configuration>")
    for entry in pacs_list or []:
        description = f" ({entry.description})" if entry.description else ""
        print(f"pacs: {entry}{description}")
    print("===================\n")


def print_token_replacements(client, dicom_file, enabled):
    """Print the aggressive anonymization tokens found in a DICOM file"""
    dataset = dcmread(dicom_file, stop_before_pixels=True)
    replacements = client.get_aggressive_anonymization(dataset, enabled=enabled)
    print("\nAggressive Anonymization:")
    print("=========================")
    for token, replacement in sorted(replacements.items()):
        print(f"{token} -> '{replacement}'")
    print("=========================\n")


def main(argv=None):
    """Main entry point for the script"""
    parser = argparse.ArgumentParser(description='Show the resolved DICOM client configuration')
    parser.add_argument('--dicom-file', type=str,
                        help='Show the aggressive anonymization tokens found in this DICOM file')
    parser.add_argument('--aggressive', action=argparse.BooleanOptionalAction, default=DEFAULT_AGGRESSIVE_ANONYMIZE,
                        help=f'Turn aggressive anonymization on or off (default/env: {DEFAULT_AGGRESSIVE_ANONYMIZE})')
    parser.add_argument('--log-level', type=str, default=DEFAULT_LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help=f'Logging level (default/env: {DEFAULT_LOG_LEVEL})')
    parser.add_argument('--log-file', type=str, default=DEFAULT_LOG_FILE,
                        help='Also log to this file')
    parser.add_argument('--show-config', action='store_true',
                        help='Print the environment configuration and exit')

    args = parser.parse_args(argv)

    print_config()
    if args.show_config:
        return 0

    log_level = getattr(logging, args.log_level)
    configure_logging(level=log_level, log_file=args.log_file)

    context = ConfigContext()
    if context.client.document is None:
        logger.error("No client configuration file could be loaded")
        return 1

    print_client_config(context.client)
    print_pacs_config(context.pacs)

    if args.dicom_file:
        try:
            print_token_replacements(context.client, args.dicom_file, args.aggressive)
        except (OSError, InvalidDicomError) as e:
            logger.error(f"Unable to read DICOM file {args.dicom_file}: {e}")
            return 1
        except ConfigurationError as e:
            logger.error(f"Aggressive anonymization is misconfigured: {e}")
            return 1

    return 0

if __name__ == "__main__":
    exit(main())
