from sqlalchemy import Column, Integer, String, Text, DateTime, Enum

from prephub.database import Base, utcnow
from prephub.models.enums import MessageStatus


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(
        Enum(MessageStatus, native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=MessageStatus.unread,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)
