#!/usr/bin/env python
"""
Configuration document loader

Tries each candidate file in order and keeps the first one that can be read
and parsed.  Failed candidates are not errors on their own; only the case
where every candidate fails is reported.
"""

import logging
import os
from typing import Iterable, List, NamedTuple, Optional
from xml.etree import ElementTree

logger = logging.getLogger('dicom_client.loader')


class LoadAttempt(NamedTuple):
    """Outcome of trying to load one candidate file"""
    path: str
    tree: Optional[ElementTree.ElementTree]
    reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.tree is not None


def read_document(path: str) -> LoadAttempt:
    """
    Read and parse a single XML document

    Parameters:
    -----------
    path : str
        File to read

    Returns:
    --------
    LoadAttempt
        Holds the parsed tree on success, or the reason it failed
    """
    try:
        return LoadAttempt(path, ElementTree.parse(path))
    except FileNotFoundError:
        return LoadAttempt(path, None, 'file not found')
    except (OSError, ElementTree.ParseError) as e:
        return LoadAttempt(path, None, str(e))


def load_first_document(candidates: Iterable[Optional[str]]) -> Optional[ElementTree.ElementTree]:
    """
    Load the first candidate file that exists and parses

    Parameters:
    -----------
    candidates : iterable of str or None
        Candidate paths in order of preference.  Unset (None or empty)
        entries are skipped.

    Returns:
    --------
    ElementTree or None
        The parsed document, or None if no candidate could be used
    """
    candidates = list(candidates)
    attempts: List[LoadAttempt] = []

    for candidate in candidates:
        if not candidate:
            continue
        full_path = os.path.abspath(candidate)
        logger.info(f"Trying configuration file {full_path}")
        attempt = read_document(candidate)
        if attempt.succeeded:
            logger.info(f"Using configuration file {full_path}")
            return attempt.tree
        logger.debug(f"Configuration file {full_path} not usable: {attempt.reason}")
        attempts.append(attempt)

    summary = ', '.join(f"{a.path} ({a.reason})" for a in attempts) or 'no candidates set'
    logger.error(f"Unable to read and parse any configuration file of: {candidates} [{summary}]")
    return None
