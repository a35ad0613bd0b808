from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from prephub.database import get_db
from prephub.schemas.message import (
    ActionOut,
    ContactCreatedOut,
    ContactIn,
    ContactListOut,
    ContactMessageOut,
)
from prephub.services import messages as messages_service
from prephub.utils.auth import Identity, require_admin


# 前台聯絡表單
contact_router = APIRouter(prefix="/api/contact", tags=["Contact"])

# 後台訊息管理
router = APIRouter(prefix="/api/messages", tags=["Messages"])


@contact_router.post("", response_model=ContactCreatedOut, status_code=201)
def send_message(body: ContactIn, db: Session = Depends(get_db)):
    msg = messages_service.create_message(db, body.name, body.email, body.subject, body.message)
    return ContactCreatedOut(message="Message sent", id=msg.id)


@router.get("", response_model=ContactListOut)
def list_messages(
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    rows = messages_service.list_messages(db)
    return ContactListOut(messages=[ContactMessageOut.model_validate(m) for m in rows])


@router.put("/{message_id}/read", response_model=ActionOut)
def mark_message_read(
    message_id: int,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    messages_service.mark_read(db, message_id)
    return ActionOut(message="Marked as read")


@router.delete("/{message_id}", response_model=ActionOut)
def delete_message(
    message_id: int,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    messages_service.delete_message(db, message_id)
    return ActionOut(message="Message deleted")
