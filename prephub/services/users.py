"""Credential store: registration, login, profile and admin user management."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from prephub.config import Settings
from prephub.database import utcnow
from prephub.errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidRole,
    NotFound,
    SelfModificationForbidden,
    ValidationError,
)
from prephub.models import Course, Favorite, Role, User
from prephub.models.user import DEFAULT_AVATAR
from prephub.utils.auth import Identity, create_access_token
from prephub.utils.hashing import hash_password, verify_password
from prephub.utils.search import LIKE_ESCAPE, contains_pattern

import logging
logger = logging.getLogger("prephub.users")

MIN_PASSWORD_LENGTH = 6


def identity_of(user: User) -> Identity:
    return Identity(id=user.id, email=user.email, role=Role(user.role))


def issue_token(user: User, cfg: Settings | None = None) -> str:
    return create_access_token(identity_of(user), cfg)


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def register(
    db: Session,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    cfg: Settings | None = None,
) -> tuple[User, str]:
    name, email = _clean(name), _clean(email)
    if not name or not email or not password:
        raise ValidationError("Name, email and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    exists = db.scalar(select(User.id).where(User.email == email))
    if exists:
        raise DuplicateEmail()

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=Role.user,
        avatar=DEFAULT_AVATAR,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail()
    db.refresh(user)

    logger.info("User registered id=%s", user.id)
    return user, issue_token(user, cfg)


def login(
    db: Session,
    email: Optional[str],
    password: Optional[str],
    cfg: Settings | None = None,
) -> tuple[User, str]:
    email = _clean(email)
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = db.scalar(select(User).where(User.email == email))
    # 不區分「查無帳號」與「密碼錯誤」
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentials()

    return user, issue_token(user, cfg)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def update_profile(
    db: Session,
    identity: Identity,
    name: Optional[str] = None,
    avatar: Optional[str] = None,
    phone: Optional[str] = None,
) -> User:
    user = get_user(db, identity.id)

    if name is not None and name.strip():
        user.name = name.strip()
    if avatar is not None and avatar.strip():
        user.avatar = avatar.strip()
    if phone is not None:
        user.phone = phone.strip() or None

    db.commit()
    db.refresh(user)
    return user


def set_role(db: Session, admin: Identity, target_id: int, role: Optional[str]) -> User:
    try:
        new_role = Role(role)
    except ValueError:
        raise InvalidRole()

    if target_id == admin.id:
        raise SelfModificationForbidden("Cannot change your own role")

    user = get_user(db, target_id)
    user.role = new_role
    db.commit()
    db.refresh(user)

    logger.info("Role changed user_id=%s role=%s by admin_id=%s", target_id, new_role.value, admin.id)
    return user


def delete_user(db: Session, admin: Identity, target_id: int) -> None:
    if target_id == admin.id:
        raise SelfModificationForbidden("Cannot delete your own account")

    db.execute(delete(Favorite).where(Favorite.user_id == target_id))
    result = db.execute(delete(User).where(User.id == target_id))
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("User not found")

    db.commit()
    logger.info("User deleted user_id=%s by admin_id=%s", target_id, admin.id)


def list_users(
    db: Session,
    search: Optional[str] = None,
    role: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[tuple[User, int]], int]:
    fav_sq = (
        select(Favorite.user_id.label("uid"), func.count(Favorite.id).label("cnt"))
        .group_by(Favorite.user_id)
        .subquery()
    )

    conds = []
    if search:
        k = contains_pattern(search.strip())
        conds.append(or_(User.name.ilike(k, escape=LIKE_ESCAPE), User.email.ilike(k, escape=LIKE_ESCAPE)))
    if role:
        try:
            conds.append(User.role == Role(role))
        except ValueError:
            raise InvalidRole()

    total = db.scalar(select(func.count(User.id)).where(*conds)) or 0

    rows = db.execute(
        select(User, func.coalesce(fav_sq.c.cnt, 0))
        .outerjoin(fav_sq, fav_sq.c.uid == User.id)
        .where(*conds)
        .order_by(User.created_at.desc(), User.id.desc())
        .limit(limit)
        .offset(offset)
    ).all()

    return [(u, int(cnt)) for u, cnt in rows], total


def get_user_detail(db: Session, user_id: int) -> tuple[User, list[Course]]:
    user = get_user(db, user_id)
    courses = db.scalars(
        select(Course)
        .join(Favorite, Favorite.course_id == Course.id)
        .where(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
    ).all()
    return user, list(courses)


def user_stats(db: Session, now: datetime | None = None) -> dict:
    now = now or utcnow()
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    total = db.scalar(select(func.count(User.id))) or 0
    admins = db.scalar(select(func.count(User.id)).where(User.role == Role.admin)) or 0
    new_this_month = db.scalar(
        select(func.count(User.id)).where(User.created_at >= month_start)
    ) or 0

    return {
        "total": total,
        "admins": admins,
        "regularUsers": total - admins,
        "newThisMonth": new_this_month,
    }
