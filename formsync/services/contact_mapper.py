"""Map a landing page submission onto a Keap contact representation"""
from typing import Any, Dict, List, Optional, Tuple

from formsync.config import Settings
from formsync.models.submission import ContactDraft, FormType
from formsync.utils.validation import has_text

# (submission field, settings attribute holding the custom field ID)
WORKSHOP_CUSTOM_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("role", "keap_role_field_id"),
    ("questions", "keap_questions_field_id"),
)
CORPORATE_CUSTOM_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("interest", "keap_interest_field_id"),
    ("challenges", "keap_challenges_field_id"),
    ("contact-method", "keap_preferred_contact_field_id"),
)


def detect_form_type(data: Dict[str, Any]) -> FormType:
    """Corporate submissions carry an organization, workshop ones do not"""
    return FormType.CORPORATE if has_text(data.get("organization")) else FormType.WORKSHOP


def split_full_name(name: str) -> Tuple[str, str]:
    """
    Split a single name field at the first space

    Returns:
        (given_name, family_name); family_name is "" for one-word names
    """
    parts = name.strip().split(" ", 1)
    given_name = parts[0]
    family_name = parts[1].strip() if len(parts) > 1 else ""
    return given_name, family_name


def resolve_names(data: Dict[str, Any]) -> Tuple[str, str]:
    """Use explicit first/last name fields when present, else split `name`"""
    if has_text(data.get("first-name")) and has_text(data.get("last-name")):
        return data["first-name"].strip(), data["last-name"].strip()
    return split_full_name(data.get("name") or "")


def custom_field_content(value: Any) -> Optional[str]:
    """
    Render a submitted value as custom field content

    Checkbox groups arrive as lists and are joined with ", ". Empty values
    produce None so the field is left out.
    """
    if isinstance(value, (list, tuple)):
        selected = [str(item) for item in value if str(item).strip()]
        return ", ".join(selected) if selected else None
    if has_text(value):
        return value
    return None


def build_custom_fields(
    data: Dict[str, Any],
    mapping: Tuple[Tuple[str, str], ...],
    settings: Settings
) -> List[Dict[str, Any]]:
    custom_fields = []
    for field_name, setting_name in mapping:
        field_id = getattr(settings, setting_name)
        if field_id is None:
            continue
        content = custom_field_content(data.get(field_name))
        if content is None:
            continue
        custom_fields.append({"id": field_id, "content": content})
    return custom_fields


def build_contact(data: Dict[str, Any], settings: Settings) -> ContactDraft:
    """
    Assemble the Keap contact body and tag list for a validated submission

    Args:
        data: Submission payload (name/email presence already checked)
        settings: Field and tag IDs come from here

    Returns:
        ContactDraft with the form type, contact body and tag IDs
    """
    form_type = detect_form_type(data)
    given_name, family_name = resolve_names(data)
    email = data["email"].strip()

    contact: Dict[str, Any] = {
        "given_name": given_name,
        "family_name": family_name,
        "email_addresses": [{"email": email, "field": "EMAIL1"}],
    }

    if form_type == FormType.CORPORATE:
        contact["company"] = {"company_name": data["organization"].strip()}
        mapping = CORPORATE_CUSTOM_FIELDS
        tag_id = settings.keap_corporate_tag_id
    else:
        mapping = WORKSHOP_CUSTOM_FIELDS
        tag_id = settings.keap_workshop_tag_id

    if has_text(data.get("phone")):
        contact["phone_numbers"] = [{"number": data["phone"].strip(), "field": "PHONE1"}]

    custom_fields = build_custom_fields(data, mapping, settings)
    if custom_fields:
        contact["custom_fields"] = custom_fields

    return ContactDraft(
        form_type=form_type,
        email=email,
        contact=contact,
        tag_ids=[tag_id] if tag_id is not None else []
    )
