"""
Short prefixed ID generator for form entities.

Format: {prefix}_{base36_random}
- fm_xxxxxxxx  - form
- qs_xxxxxxxx  - question
- op_xxxxxxxx  - option
- sb_xxxxxxxx  - submission

8 chars base36 = 36^8 = 2.8 trillion unique IDs per type
Total length: 11 chars (2 prefix + underscore + 8 random)
"""
import secrets
import re
from typing import Optional

# Base36 alphabet (lowercase letters + digits)
ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)  # 36

# Valid prefixes
PREFIXES = {
    'form': 'fm',
    'question': 'qs',
    'option': 'op',
    'submission': 'sb',
}

# Reverse mapping for validation
PREFIX_TO_TYPE = {v: k for k, v in PREFIXES.items()}

# Regex for validation
ID_PATTERN = re.compile(r'^(fm|qs|op|sb)_[0-9a-z]{8}$')


def _random_base36(length: int = 8) -> str:
    """Generate random base36 string"""
    return ''.join(ALPHABET[secrets.randbelow(BASE)] for _ in range(length))


def generate_id(entity_type: str) -> str:
    """
    Generate a new short ID for the given entity type.

    Args:
        entity_type: One of 'form', 'question', 'option', 'submission'

    Returns:
        Short ID like 'op_x5b8r2yj'

    Raises:
        ValueError: If entity_type is invalid
    """
    if entity_type not in PREFIXES:
        raise ValueError(f"Invalid entity type: {entity_type}. "
                        f"Must be one of: {list(PREFIXES.keys())}")

    return f"{PREFIXES[entity_type]}_{_random_base36(8)}"


def validate_id(id_str: str, entity_type: Optional[str] = None) -> bool:
    """
    Check if a string is a valid short ID.

    Args:
        id_str: String to validate
        entity_type: If given, the ID must also carry this type's prefix

    Returns:
        True if valid, False otherwise
    """
    if not id_str or not isinstance(id_str, str):
        return False
    if not ID_PATTERN.match(id_str):
        return False
    if entity_type is not None:
        return get_id_type(id_str) == entity_type
    return True


def get_id_type(id_str: str) -> Optional[str]:
    """
    Extract the entity type from an ID.

    Args:
        id_str: A short ID like 'fm_x5b8r2yj'

    Returns:
        Entity type ('form', 'option', etc.) or None if invalid
    """
    if not id_str or not ID_PATTERN.match(id_str):
        return None
    return PREFIX_TO_TYPE.get(id_str[:2])


# Convenience functions for each type
def generate_form_id() -> str:
    """Generate a new form ID"""
    return generate_id('form')


def generate_question_id() -> str:
    """Generate a new question ID"""
    return generate_id('question')


def generate_option_id() -> str:
    """Generate a new option ID"""
    return generate_id('option')


def generate_submission_id() -> str:
    """Generate a new submission ID"""
    return generate_id('submission')
