import json

from sqlalchemy import Column, Integer, String, Text, Float, DateTime, Enum
from sqlalchemy.types import TypeDecorator

from prephub.database import Base, utcnow
from prephub.models.enums import CourseStatus


class HighlightList(TypeDecorator):
    """Ordered list of strings kept as JSON text.

    Writes ``None`` as ``"[]"``; reads NULL, empty or unparseable text as ``[]``.
    Callers only ever see ``list[str]``.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return "[]"
        return json.dumps([str(v) for v in value], ensure_ascii=False)

    def process_result_value(self, value, dialect):
        if not value:
            return []
        try:
            data = json.loads(value)
        except ValueError:
            return []
        if not isinstance(data, list):
            return []
        return [str(v) for v in data]


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String(100), index=True)
    subject = Column(String(100))
    brand = Column(String(100), index=True)
    teacher = Column(String(100))
    teacher_bio = Column(Text)

    duration = Column(String(50))
    lessons = Column(Integer, nullable=False, default=0)
    price = Column(Integer, nullable=False)
    original_price = Column(Integer)

    rating = Column(Float, nullable=False, default=0)
    reviews_count = Column(Integer, nullable=False, default=0)
    students_count = Column(Integer, nullable=False, default=0)

    image_url = Column(Text)
    highlights = Column(HighlightList, nullable=False, default=list)

    status = Column(
        Enum(CourseStatus, native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=CourseStatus.active,
        index=True,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)
