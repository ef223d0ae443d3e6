from pydantic import BaseModel
from typing import Optional


class ContactRequest(BaseModel):
    """Raw contact form body; every field may be absent on the wire"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None


class ContactSubmission(BaseModel):
    name: str
    email: str
    message: str
    phone: Optional[str] = None


class EmailDeliveryResult(BaseModel):
    """Outcome of one send attempt against the email provider"""
    success: bool
    status_code: int
    body: str = ""
