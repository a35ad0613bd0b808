from sqlalchemy import Column, Integer, String, Text, DateTime, Enum

from prephub.database import Base, utcnow
from prephub.models.enums import Role

DEFAULT_AVATAR = "👤"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    phone = Column(String(30), nullable=True)
    role = Column(
        Enum(Role, native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=Role.user,
    )
    avatar = Column(Text, nullable=False, default=DEFAULT_AVATAR)
    created_at = Column(DateTime, default=utcnow, nullable=False)
