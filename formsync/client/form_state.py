"""Explicit form state for the landing page forms"""
from typing import Dict, Iterator, List, Optional, Tuple

from formsync.client.payload import HONEYPOT_FIELD, MULTI_VALUE_FIELDS, Payload, assemble_payload
from formsync.client.validators import (
    REQUIRED_CHOICE_GROUP,
    NameLayout,
    required_text_fields,
    validate_field,
    validate_form,
)
from formsync.models.submission import FormType


class FormState:
    """
    Field values, selections and error display for one form

    Errors follow an optimistic-clear policy: editing a field drops its
    error immediately, and it is only checked again on blur or submit.
    """

    def __init__(self, variant: FormType, name_layout: NameLayout = NameLayout.SPLIT):
        self.variant = variant
        self.name_layout = name_layout
        self.values: Dict[str, str] = {}
        self.selections: Dict[str, List[str]] = {group: [] for group in MULTI_VALUE_FIELDS}
        self.honeypot = ""
        self.errors: Dict[str, str] = {}
        self.focused: Optional[str] = None

    @property
    def required_fields(self) -> Tuple[str, ...]:
        return required_text_fields(self.variant, self.name_layout) + (REQUIRED_CHOICE_GROUP[self.variant],)

    def _current(self, field: str):
        if field in self.selections:
            return self.selections[field]
        return self.values.get(field, "")

    def edit(self, field: str, value: str) -> None:
        if field == HONEYPOT_FIELD:
            self.honeypot = value
            return
        self.values[field] = value
        self.errors.pop(field, None)

    def toggle(self, group: str, option: str, checked: bool = True) -> None:
        selected = self.selections.setdefault(group, [])
        if checked and option not in selected:
            selected.append(option)
        elif not checked and option in selected:
            selected.remove(option)
        self.errors.pop(group, None)

    def blur(self, field: str) -> Optional[str]:
        """Re-validate one field; only required fields are checked"""
        if field not in self.required_fields:
            return None
        error = validate_field(field, self._current(field))
        if error:
            self.errors[field] = error
        else:
            self.errors.pop(field, None)
        return error

    def validate_all(self) -> bool:
        """Validate every required field and focus the first invalid one"""
        self.errors = validate_form(self)
        if self.errors:
            self.focused = next(iter(self.errors))
        return not self.errors

    def is_bot(self) -> bool:
        return self.honeypot != ""

    def entries(self) -> Iterator[Tuple[str, str]]:
        """(name, value) pairs the way the browser serializes the form"""
        for field, value in self.values.items():
            yield field, value
        for group, selected in self.selections.items():
            for option in selected:
                yield group, option
        yield HONEYPOT_FIELD, self.honeypot

    def payload(self) -> Payload:
        return assemble_payload(self.entries())

    def reset(self) -> None:
        self.values = {}
        self.selections = {group: [] for group in MULTI_VALUE_FIELDS}
        self.honeypot = ""
        self.errors = {}
        self.focused = None
