"""Client-side field validators (pure functions, no DOM)"""
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

from formsync.models.submission import FormType
from formsync.utils.validation import is_valid_email


class NameLayout(str, Enum):
    """Whether a form asks for one `name` field or first/last name fields"""
    SINGLE = "single"
    SPLIT = "split"


CHOICE_GROUP_ERROR = "Please select at least one option"


def _name_part(label: str) -> Callable[[str], Optional[str]]:
    def validate(value: str) -> Optional[str]:
        if not value.strip():
            return f"Please enter your {label.lower()}"
        if len(value.strip()) < 2:
            return f"{label} must be at least 2 characters"
        return None
    return validate


def validate_organization(value: str) -> Optional[str]:
    if not value.strip():
        return "Please enter your organization name"
    return None


def validate_email(value: str) -> Optional[str]:
    if not value.strip():
        return "Please enter your email address"
    if not is_valid_email(value):
        return "Please enter a valid email address"
    return None


def validate_choice_group(selected: Sequence[str]) -> Optional[str]:
    if not selected:
        return CHOICE_GROUP_ERROR
    return None


TEXT_VALIDATORS: Dict[str, Callable[[str], Optional[str]]] = {
    "name": _name_part("Name"),
    "first-name": _name_part("First name"),
    "last-name": _name_part("Last name"),
    "organization": validate_organization,
    "email": validate_email,
}

# Checkbox group that must have a selection on each form
REQUIRED_CHOICE_GROUP = {
    FormType.WORKSHOP: "role",
    FormType.CORPORATE: "interest",
}


def required_text_fields(variant: FormType, name_layout: NameLayout = NameLayout.SPLIT) -> Tuple[str, ...]:
    """Required text fields in on-page order"""
    names = ("name",) if name_layout == NameLayout.SINGLE else ("first-name", "last-name")
    if variant == FormType.CORPORATE:
        return names + ("organization", "email")
    return names + ("email",)


def validate_field(field: str, value) -> Optional[str]:
    """
    Validate a single field

    Args:
        field: Field name; choice groups take the list of selected options
        value: Current value

    Returns:
        Error message, or None when valid
    """
    if field in TEXT_VALIDATORS:
        return TEXT_VALIDATORS[field](value or "")
    if field in REQUIRED_CHOICE_GROUP.values():
        return validate_choice_group(value or [])
    return None


def validate_form(state) -> Dict[str, str]:
    """
    Validate every required field of a form

    Args:
        state: Object with `variant`, `name_layout`, `values` (text fields)
            and `selections` (checkbox groups), e.g. a FormState

    Returns:
        Field to error message, in on-page order; empty when valid
    """
    group = REQUIRED_CHOICE_GROUP[state.variant]
    errors: Dict[str, str] = {}
    for field in required_text_fields(state.variant, state.name_layout) + (group,):
        if field == group:
            value = state.selections.get(field, [])
        else:
            value = state.values.get(field, "")
        error = validate_field(field, value)
        if error:
            errors[field] = error
    return errors
