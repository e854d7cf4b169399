#!/usr/bin/env python
"""
Anonymization rules derived from the client configuration

Builds the default replacement values offered to the user, the set of words
that aggressive anonymization must leave alone, and the token replacement
map used to scrub free text of values found elsewhere in a data set.
"""

import logging
import re
from typing import Dict, Iterable, List, Set

from pydicom import Dataset, config
from pydicom.dataelem import DataElement, empty_value_for_VR
from pydicom.multival import MultiValue

from dicom_client.core.dictionary import DicomDictionary, is_sequence_vr
from dicom_client.core.errors import ConfigurationError, UnknownAttributeError
from dicom_client.core.xml_utils import get_attribute, get_multiple_nodes, get_single_node, get_text

logger = logging.getLogger('dicom_client.anonymization')

RESERVED_WORD_LIST_PATH = 'DicomClientConfig/ReservedWordList'
AGGRESSIVE_ANONYMIZATION_PATH = 'DicomClientConfig/AggressiveAnonymization'
ANONYMIZE_DEFAULT_LIST_PATH = 'DicomClientConfig/AnonymizeDefaultList/*'

# Anything that is not a lower case letter or digit separates tokens
TOKEN_SEPARATOR = re.compile(r'[^a-z0-9]+')

MIN_TOKEN_LENGTH = 2

# Binary numeric value representations hold numbers, not text
INT_VRS = ('US', 'SS', 'UL', 'SL', 'UV', 'SV')
FLOAT_VRS = ('FL', 'FD')


def typed_value(vr: str, text: str):
    """Convert configured text to the Python type an attribute of this VR holds"""
    if not text:
        return empty_value_for_VR(vr)
    if vr in INT_VRS:
        return int(text)
    if vr in FLOAT_VRS:
        return float(text)
    return text


def tokenize(value: str) -> List[str]:
    """Split a value into lower case alphanumeric tokens"""
    return [token for token in TOKEN_SEPARATOR.split(value.lower()) if token]


def original_string_values(element: DataElement) -> List[str]:
    """The values of an element as strings, leaving out empty and binary values"""
    if is_sequence_vr(element.VR) or element.value is None:
        return []
    values = element.value
    if not isinstance(values, (MultiValue, list, tuple)):
        values = [values]
    return [str(value) for value in values
            if value is not None and not isinstance(value, bytes) and str(value) != '']


def build_reserved_words(document, dictionary: DicomDictionary) -> Set[str]:
    """
    Words that aggressive anonymization must never replace

    These are the configured reserved words plus every word used in the
    full name of a dictionary attribute.  An empty list still protects the
    dictionary words; if the list element is missing the set is left empty
    so nothing extra is protected.
    """
    reserved_words = set()
    try:
        text = get_text(get_single_node(document, RESERVED_WORD_LIST_PATH), '')
    except ConfigurationError as e:
        logger.warning(f"No reserved word list available: {e}")
        return reserved_words

    reserved_words.update(text.lower().split())
    for _, full_name in dictionary.iter_full_names():
        reserved_words.update(word for word in full_name.lower().split(' ') if word)

    logger.info(f"Built reserved word list of {len(reserved_words)} words")
    return reserved_words


def build_token_replacements(document, dataset: Dataset, dictionary: DicomDictionary,
                             reserved_words: Iterable[str]) -> Dict[str, str]:
    """
    Map every token found in the configured attributes to its replacement

    Parameters:
    -----------
    document : ElementTree
        Client configuration document
    dataset : Dataset
        Attributes whose values are to be scrubbed from free text
    dictionary : DicomDictionary
        Resolves the configured attribute names
    reserved_words : set of str
        Tokens that are never replaced

    Returns:
    --------
    dict
        Lower case token -> replacement text.  Later rules overwrite earlier
        ones for the same token.

    Raises:
    -------
    UnknownAttributeError
        If a rule names an attribute that is not in the dictionary
    """
    replacements = {}
    reserved_words = set(reserved_words)
    try:
        for node in get_multiple_nodes(document, AGGRESSIVE_ANONYMIZATION_PATH):
            replacement = get_attribute(node, 'replacement', '')
            tag_name = get_text(node, '')
            tag = dictionary.tag_for_name(tag_name)
            if tag is None:
                raise UnknownAttributeError(tag_name, 'AggressiveAnonymization')
            if tag not in dataset:
                continue
            for value in original_string_values(dataset[tag]):
                for token in tokenize(value):
                    if len(token) >= MIN_TOKEN_LENGTH and token not in reserved_words:
                        replacements[token] = replacement
    except UnknownAttributeError:
        raise
    except ConfigurationError as e:
        logger.error(f"Unable to build aggressive anonymization list: {e}")
        return {}
    except (ValueError, TypeError) as e:
        logger.error(f"Failed to read attribute values for aggressive anonymization: {e}")
        return {}

    return replacements


def build_anonymizing_replacement_list(document, dictionary: DicomDictionary) -> Dataset:
    """
    Default replacement values for attributes the user may anonymize

    Entries naming an unknown attribute are skipped.  Sequence attributes
    are left out since they have no value of their own to replace.
    """
    replacement_list = Dataset()
    try:
        nodes = get_multiple_nodes(document, ANONYMIZE_DEFAULT_LIST_PATH)
    except ConfigurationError:
        logger.warning("Unable to parse list of default attributes to anonymize.  User will have to supply them manually.")
        return replacement_list

    for node in nodes:
        tag_name = get_attribute(node, 'Name')
        tag = dictionary.tag_for_name(tag_name)
        if tag is None:
            logger.debug(f"Skipping unknown default attribute {tag_name}")
            continue

        vr = dictionary.vr_for_tag(tag)
        if is_sequence_vr(vr):
            logger.debug(f"Skipping sequence attribute {tag_name}, it has no value to replace")
            continue

        # Ambiguous entries such as 'US or SS' use the first choice
        vr = (vr or 'UN').split(' or ')[0]
        try:
            value = typed_value(vr, get_text(node, ''))
            replacement_list.add(DataElement(tag, vr, value, validation_mode=config.RAISE))
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to construct DICOM attribute {tag_name}: {e}")

    return replacement_list
