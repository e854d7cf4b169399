#!/usr/bin/env python
"""
Setup script for the DICOM Client Configuration package
"""

from setuptools import setup, find_packages
import os
import re

# Get the version from dicom_client/__init__.py
with open(os.path.join('dicom_client', '__init__.py'), 'r') as f:
    version_file = f.read()
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", version_file, re.M)
    if version_match:
        version = version_match.group(1)
    else:
        raise RuntimeError("Unable to find version string in dicom_client/__init__.py")

# Read the README file for the long description
with open('README.md', 'r') as f:
    long_description = f.read()

setup(
    name='dicom_client_config',
    version=version,
    description='Configuration and anonymization rules for a DICOM client',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Hospital IT Team',
    author_email='it@hospital.example',
    packages=find_packages(exclude=['tests', 'tests.*']),
    scripts=[
        'scripts/dicom_config.py',
    ],
    entry_points={
        'console_scripts': [
            'dicom-client-config=dicom_client.cli.config:main',
        ],
    },
    install_requires=[
        'pydicom>=3.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Healthcare Industry',
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Environment :: Console',
        'Topic :: Scientific/Engineering :: Medical Science Apps.',
    ],
    python_requires='>=3.10',
    keywords='dicom, medical imaging, anonymization, configuration',
) 
