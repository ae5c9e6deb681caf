"""Build the JSON payload the submit endpoint expects"""
from typing import Dict, Iterable, List, Tuple, Union

from formsync.utils.validation import HONEYPOT_FIELD

# Checkbox groups; repeated entries collect into a list
MULTI_VALUE_FIELDS = ("role", "interest", "contact-method")

Payload = Dict[str, Union[str, List[str]]]


def assemble_payload(entries: Iterable[Tuple[str, str]]) -> Payload:
    """
    Group form entries into a payload

    Values are passed through untrimmed; the honeypot never leaves the page.

    Args:
        entries: (name, value) pairs in form order, like FormData entries

    Returns:
        Field name to string, or to the ordered list of checked options
    """
    data: Payload = {}
    for key, value in entries:
        if key in MULTI_VALUE_FIELDS:
            data.setdefault(key, []).append(value)
        elif key != HONEYPOT_FIELD:
            data[key] = value
    return data
