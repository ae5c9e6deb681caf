"""Field checks shared by the form client and the submit endpoint"""
import re
from typing import Any

# Same pattern the landing page script uses: local@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(value: Any) -> bool:
    """Return True when value fully matches the basic email pattern"""
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def has_text(value: Any) -> bool:
    """Return True for a string with non-whitespace content"""
    return isinstance(value, str) and bool(value.strip())


# Hidden field only bots fill in
HONEYPOT_FIELD = "website"
