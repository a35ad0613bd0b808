from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from prephub.models.enums import MessageStatus


class ContactIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class ContactMessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    subject: str
    message: str
    status: MessageStatus
    created_at: Optional[datetime] = None


class ContactCreatedOut(BaseModel):
    message: str
    id: int


class ContactListOut(BaseModel):
    messages: list[ContactMessageOut]


class ActionOut(BaseModel):
    success: bool = True
    message: str
