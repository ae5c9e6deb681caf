"""Tests for submission → Keap contact mapping."""

import pytest

from formsync.models.submission import FormType
from formsync.services.contact_mapper import (
    build_contact,
    custom_field_content,
    detect_form_type,
    split_full_name,
)


@pytest.mark.parametrize("name, expected", [
    ("Jane Doe", ("Jane", "Doe")),
    ("Jane", ("Jane", "")),
    ("Mary Ann van Dyke", ("Mary", "Ann van Dyke")),
    ("  Jane Doe  ", ("Jane", "Doe")),
])
def test_split_full_name(name, expected):
    assert split_full_name(name) == expected


def test_detect_form_type():
    assert detect_form_type({"organization": "Acme"}) == FormType.CORPORATE
    assert detect_form_type({"organization": "  "}) == FormType.WORKSHOP
    assert detect_form_type({}) == FormType.WORKSHOP


def test_custom_field_content_joins_selected_options():
    assert custom_field_content(["Developer", "Manager"]) == "Developer, Manager"
    assert custom_field_content([]) is None
    assert custom_field_content("") is None
    assert custom_field_content("Free text") == "Free text"


def test_workshop_contact(settings):
    draft = build_contact({
        "name": "Jane Doe",
        "email": "jane@x.com",
        "role": ["Developer", "Manager"],
        "questions": "How to start?",
    }, settings)

    assert draft.form_type == FormType.WORKSHOP
    assert draft.email == "jane@x.com"
    assert draft.tag_ids == [7]
    assert "company" not in draft.contact
    assert draft.contact["custom_fields"] == [
        {"id": 42, "content": "Developer, Manager"},
        {"id": 43, "content": "How to start?"},
    ]


def test_unconfigured_field_ids_are_skipped(settings):
    settings.keap_role_field_id = None
    settings.keap_workshop_tag_id = None

    draft = build_contact({
        "name": "Jane Doe",
        "email": "jane@x.com",
        "role": ["Manager"],
    }, settings)

    assert "custom_fields" not in draft.contact
    assert draft.tag_ids == []


def test_workshop_ignores_corporate_fields(settings):
    draft = build_contact({
        "name": "Jane Doe",
        "email": "jane@x.com",
        "interest": ["Training"],
    }, settings)

    assert "custom_fields" not in draft.contact


def test_explicit_first_and_last_name_win(settings):
    draft = build_contact({
        "name": "Ignored Name",
        "first-name": " Ada ",
        "last-name": "Lovelace",
        "email": "ada@engine.org",
    }, settings)

    assert draft.contact["given_name"] == "Ada"
    assert draft.contact["family_name"] == "Lovelace"
