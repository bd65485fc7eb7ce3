"""Tolerant field extraction from parsed SmugMug JSON documents.

Every accessor takes a parsed JSON object (a ``dict``) and a field name and
returns the typed value, or ``None`` when the field is missing, null, or of a
type that cannot be interpreted. Nothing in this module raises for an absent
field; only whole-document parsing is allowed to fail.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

# SmugMug encodes some flags as 0/1 instead of JSON booleans
_TRUE_STRINGS = ("1", "true")
_FALSE_STRINGS = ("0", "false")


def get_property(obj: Optional[Mapping[str, Any]], name: Optional[str]) -> Any:
    """Return the raw value of a field, or None if missing or null.

    Args:
        obj: Parsed JSON object (may be None)
        name: Field name

    Returns:
        Raw field value or None
    """
    if obj is None or name is None or not isinstance(obj, Mapping):
        return None
    return obj.get(name)


def get_string(obj: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    """Return a string field, or None."""
    value = get_property(obj, name)
    if isinstance(value, str):
        return value
    if value is not None:
        logger.debug(f"Ignoring non-string value for {name}: {value!r}")
    return None


def get_int(obj: Optional[Mapping[str, Any]], name: str) -> Optional[int]:
    """Return an integer field, or None.

    Numeric strings and whole floats are accepted since the API is not
    consistent about quoting IDs.
    """
    value = get_property(obj, name)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            logger.debug(f"Ignoring non-integer value for {name}: {value!r}")
    return None


def get_float(obj: Optional[Mapping[str, Any]], name: str) -> Optional[float]:
    """Return a floating point field, or None."""
    value = get_property(obj, name)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            logger.debug(f"Ignoring non-numeric value for {name}: {value!r}")
    return None


def get_bool(obj: Optional[Mapping[str, Any]], name: str) -> Optional[bool]:
    """Return a boolean field, or None.

    Accepts native JSON booleans as well as the vendor's 0/1 encoding, either
    as numbers or as strings.

    Args:
        obj: Parsed JSON object
        name: Field name

    Returns:
        True, False, or None when absent or not interpretable
    """
    value = get_property(obj, name)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False
    elif isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    logger.debug(f"Ignoring non-boolean value for {name}: {value!r}")
    return None


def get_object(
    obj: Optional[Mapping[str, Any]],
    name: str
) -> Optional[Dict[str, Any]]:
    """Return a nested JSON object, or None."""
    value = get_property(obj, name)
    return value if isinstance(value, dict) else None


def get_list(obj: Optional[Mapping[str, Any]], name: str) -> List[Any]:
    """Return a nested JSON array, or an empty list when absent."""
    value = get_property(obj, name)
    return value if isinstance(value, list) else []
