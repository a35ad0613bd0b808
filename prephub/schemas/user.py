from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from prephub.models.enums import Role
from prephub.schemas.course import CourseOut


class UserRegister(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    avatar: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthOut(BaseModel):
    message: str
    token: str
    user: UserOut


class MeOut(BaseModel):
    user: UserOut


class ProfileUpdateIn(BaseModel):
    name: Optional[str] = None
    avatar: Optional[str] = None
    phone: Optional[str] = None


class RoleUpdateIn(BaseModel):
    # 不直接用 Role，讓錯誤值走 InvalidRole
    role: Optional[str] = None


class AdminUserOut(UserOut):
    favorites_count: int = 0


class AdminUserListOut(BaseModel):
    users: list[AdminUserOut]
    total: int


class UserStatsOut(BaseModel):
    total: int
    admins: int
    regularUsers: int
    newThisMonth: int


class MessageOut(BaseModel):
    message: str


class AdminUserDetailOut(BaseModel):
    user: UserOut
    favorites: list[CourseOut]
