from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from prephub.database import get_db
from prephub.schemas.course import CourseOut
from prephub.schemas.user import (
    AdminUserDetailOut,
    AdminUserListOut,
    AdminUserOut,
    MessageOut,
    RoleUpdateIn,
    UserOut,
    UserStatsOut,
)
from prephub.services import users as users_service
from prephub.utils.auth import Identity, require_admin
from prephub.utils.paging import parse_limit_offset


router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=AdminUserListOut)
def admin_list_users(
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),

    search: Optional[str] = Query(None, description="name / email"),
    role: Optional[str] = Query(None, description="user/admin"),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
):
    lim, off = parse_limit_offset(limit, offset)
    rows, total = users_service.list_users(db, search=search, role=role, limit=lim, offset=off)

    items = [
        AdminUserOut(**UserOut.model_validate(u).model_dump(), favorites_count=cnt)
        for u, cnt in rows
    ]
    return AdminUserListOut(users=items, total=total)


@router.get("/stats/overview", response_model=UserStatsOut)
def admin_user_stats(
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    return UserStatsOut(**users_service.user_stats(db))


@router.get("/{user_id}", response_model=AdminUserDetailOut)
def admin_get_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    user, courses = users_service.get_user_detail(db, user_id)
    return AdminUserDetailOut(
        user=UserOut.model_validate(user),
        favorites=[CourseOut.model_validate(c) for c in courses],
    )


@router.put("/{user_id}/role", response_model=MessageOut)
def admin_update_role(
    user_id: int,
    body: RoleUpdateIn,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    users_service.set_role(db, admin, user_id, body.role)
    return MessageOut(message="Role updated")


@router.delete("/{user_id}", response_model=MessageOut)
def admin_delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    users_service.delete_user(db, admin, user_id)
    return MessageOut(message="User deleted")
