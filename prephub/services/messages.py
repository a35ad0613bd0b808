from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from prephub.errors import NotFound, ValidationError
from prephub.models import Message, MessageStatus

import logging
logger = logging.getLogger("prephub.messages")


def create_message(db: Session, name, email, subject, message) -> Message:
    fields = [name, email, subject, message]
    if any(not (f or "").strip() for f in fields):
        raise ValidationError("Name, email, subject and message are required")

    msg = Message(
        name=name.strip(),
        email=email.strip(),
        subject=subject.strip(),
        message=message.strip(),
    )
    db.add(msg)
    db.commit()
    db.refresh(msg)

    logger.info("Contact message received id=%s", msg.id)
    return msg


def list_messages(db: Session) -> list[Message]:
    return list(db.scalars(
        select(Message).order_by(Message.created_at.desc(), Message.id.desc())
    ).all())


def mark_read(db: Session, message_id: int) -> Message:
    msg = db.get(Message, message_id)
    if not msg:
        raise NotFound("Message not found")
    msg.status = MessageStatus.read
    db.commit()
    db.refresh(msg)
    return msg


def delete_message(db: Session, message_id: int) -> None:
    result = db.execute(delete(Message).where(Message.id == message_id))
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("Message not found")
    db.commit()
