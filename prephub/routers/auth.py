from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from prephub.database import get_db
from prephub.schemas.user import (
    AuthOut,
    MeOut,
    MessageOut,
    ProfileUpdateIn,
    UserLogin,
    UserOut,
    UserRegister,
)
from prephub.services import users as users_service
from prephub.utils.auth import Identity, get_current_identity

import logging
logger = logging.getLogger("prephub.auth")


router = APIRouter(prefix="/api/auth", tags=["Auth"])


# 註冊
@router.post("/register", response_model=AuthOut, status_code=201)
def register(body: UserRegister, request: Request, db: Session = Depends(get_db)):
    user, token = users_service.register(
        db, body.name, body.email, body.password, request.app.state.settings
    )
    return AuthOut(message="Registered successfully", token=token, user=UserOut.model_validate(user))


# 登入
@router.post("/login", response_model=AuthOut)
def login(body: UserLogin, request: Request, db: Session = Depends(get_db)):
    user, token = users_service.login(db, body.email, body.password, request.app.state.settings)
    return AuthOut(message="Logged in successfully", token=token, user=UserOut.model_validate(user))


# 取得使用者資料
@router.get("/me", response_model=MeOut)
def get_me(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    user = users_service.get_user(db, identity.id)
    return MeOut(user=UserOut.model_validate(user))


@router.put("/profile", response_model=MessageOut)
def update_profile(
    body: ProfileUpdateIn,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    users_service.update_profile(db, identity, name=body.name, avatar=body.avatar, phone=body.phone)
    return MessageOut(message="Profile updated")
