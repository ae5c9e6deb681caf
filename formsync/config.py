"""Application configuration"""
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings"""

    # Keap CRM
    # NOTE: token is optional here so the app boots without it; the submit
    # endpoint answers 500 "Server configuration error" when it is missing
    keap_access_token: Optional[str] = None
    keap_api_base_url: str = "https://api.infusionsoft.com/crm/rest"
    keap_api_version: Literal["v1", "v2"] = "v2"
    keap_timeout_seconds: float = 30.0

    # Custom field IDs (fields without an ID are skipped)
    keap_role_field_id: Optional[int] = None
    keap_questions_field_id: Optional[int] = None
    keap_interest_field_id: Optional[int] = None
    keap_challenges_field_id: Optional[int] = None
    keap_preferred_contact_field_id: Optional[int] = None

    # Tag IDs per form type
    keap_workshop_tag_id: Optional[int] = None
    keap_corporate_tag_id: Optional[int] = None

    # Notification email (Resend)
    resend_api_key: Optional[str] = None
    notification_to_email: str = "info@paradoxprocess.org"
    notification_from: str = "Paradox Process <noreply@paradoxprocess.org>"

    # Application
    environment: str = "development"
    cors_origins: list[str] = ["*"]
    expose_error_details: bool = False

    @field_validator(
        "keap_access_token",
        "keap_role_field_id",
        "keap_questions_field_id",
        "keap_interest_field_id",
        "keap_challenges_field_id",
        "keap_preferred_contact_field_id",
        "keap_workshop_tag_id",
        "keap_corporate_tag_id",
        "resend_api_key",
        mode="before",
    )
    @classmethod
    def blank_as_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def keap_base_url(self) -> str:
        """Versioned Keap REST root, e.g. .../crm/rest/v2"""
        return f"{self.keap_api_base_url.rstrip('/')}/{self.keap_api_version}"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
