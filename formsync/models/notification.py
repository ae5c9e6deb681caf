"""Notification-related Pydantic models"""
from pydantic import BaseModel, EmailStr


class EmailNotification(BaseModel):
    """Basic email notification"""
    to_email: EmailStr
    subject: str
    html_content: str
    from_address: str
