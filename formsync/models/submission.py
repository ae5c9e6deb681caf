"""Submission-related Pydantic models"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class FormType(str, Enum):
    """Which landing page form produced a submission"""
    WORKSHOP = "workshop"
    CORPORATE = "corporate"


class SubmissionResponse(BaseModel):
    """Envelope returned by the submit endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: Optional[str] = None
    contact_id: Optional[str] = Field(default=None, alias="contactId")

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ContactDraft(BaseModel):
    """Keap contact body plus the tags to apply once it is resolved"""
    form_type: FormType
    email: str
    contact: Dict[str, Any]
    tag_ids: List[int] = []
