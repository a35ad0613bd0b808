from sqlalchemy import Column, Integer, String, Text, DateTime

from prephub.database import Base, utcnow

DEFAULT_LOGO = "🏫"


class Brand(Base):
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    logo = Column(Text, nullable=False, default=DEFAULT_LOGO)
    courses_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)
