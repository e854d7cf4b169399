#!/usr/bin/env python
"""
Exceptions raised while interpreting the client configuration
"""


class ConfigurationError(Exception):
    """Base class for configuration problems"""


class ConfigValueError(ConfigurationError):
    """A required value is missing from the configuration document"""

    def __init__(self, path, reason=None):
        self.path = path
        message = f"Unable to read configuration value {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownAttributeError(ConfigurationError):
    """A configured attribute name is not in the DICOM dictionary"""

    def __init__(self, name, context):
        self.name = name
        super().__init__(f"Unknown DICOM attribute {name} in {context} list.")
