"""Course catalog: filtered listing, detail and admin mutations."""

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from prephub.errors import NotFound, ValidationError
from prephub.models import Course, CourseStatus
from prephub.services.favorites import is_favorited
from prephub.utils.auth import Identity
from prephub.utils.paging import DEFAULT_LIMIT, DEFAULT_OFFSET, parse_limit_offset
from prephub.utils.search import LIKE_ESCAPE, contains_pattern

import logging
logger = logging.getLogger("prephub.catalog")


DEFAULT_SORT = "newest"

# sort 名稱 -> 排序欄位；id 當 tie-breaker 讓分頁穩定
SORTS = {
    "price_asc": (Course.price.asc(), Course.id.asc()),
    "price_desc": (Course.price.desc(), Course.id.desc()),
    "rating": (Course.rating.desc(), Course.id.desc()),
    "popular": (Course.students_count.desc(), Course.id.desc()),
    "newest": (Course.created_at.desc(), Course.id.desc()),
}

# 可由 admin 更新的欄位
EDITABLE_FIELDS = (
    "title", "description", "category", "subject", "brand", "teacher",
    "teacher_bio", "duration", "lessons", "price", "original_price",
    "rating", "reviews_count", "students_count", "image_url", "highlights",
    "status",
)


@dataclass(frozen=True)
class CourseFilters:
    category: Optional[str] = None
    brand: Optional[str] = None
    subject: Optional[str] = None
    search: Optional[str] = None
    sort: str = DEFAULT_SORT
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET

    @classmethod
    def from_query(
        cls,
        category: Optional[str] = None,
        brand: Optional[str] = None,
        subject: Optional[str] = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        limit: Any = None,
        offset: Any = None,
    ) -> "CourseFilters":
        lim, off = parse_limit_offset(limit, offset)
        return cls(
            category=category or None,
            brand=brand or None,
            subject=subject or None,
            search=(search or "").strip() or None,
            sort=sort if sort in SORTS else DEFAULT_SORT,
            limit=lim,
            offset=off,
        )


def _conditions(filters: CourseFilters) -> list:
    conds = [Course.status == CourseStatus.active]

    if filters.category:
        conds.append(Course.category == filters.category)
    if filters.brand:
        conds.append(Course.brand == filters.brand)
    if filters.subject:
        conds.append(Course.subject == filters.subject)
    if filters.search:
        k = contains_pattern(filters.search)
        conds.append(or_(
            Course.title.ilike(k, escape=LIKE_ESCAPE),
            Course.description.ilike(k, escape=LIKE_ESCAPE),
            Course.teacher.ilike(k, escape=LIKE_ESCAPE),
        ))

    return conds


def list_courses(db: Session, filters: CourseFilters) -> tuple[list[Course], int]:
    conds = _conditions(filters)

    total = db.scalar(select(func.count(Course.id)).where(*conds)) or 0

    rows = db.scalars(
        select(Course)
        .where(*conds)
        .order_by(*SORTS.get(filters.sort, SORTS[DEFAULT_SORT]))
        .limit(filters.limit)
        .offset(filters.offset)
    ).all()

    return list(rows), total


def export_rows(db: Session, filters: CourseFilters) -> list[dict]:
    """Every course matching ``filters`` (pagination ignored), flattened for a spreadsheet."""
    rows = db.scalars(
        select(Course)
        .where(*_conditions(filters))
        .order_by(*SORTS.get(filters.sort, SORTS[DEFAULT_SORT]))
    ).all()

    return [
        {
            "id": c.id,
            "title": c.title,
            "brand": c.brand,
            "category": c.category,
            "subject": c.subject,
            "teacher": c.teacher,
            "duration": c.duration,
            "lessons": c.lessons,
            "price": c.price,
            "original_price": c.original_price,
            "rating": c.rating,
            "students_count": c.students_count,
            "highlights": "; ".join(c.highlights or []),
        }
        for c in rows
    ]


def list_categories(db: Session) -> list[str]:
    rows = db.scalars(
        select(Course.category)
        .where(Course.status == CourseStatus.active, Course.category.is_not(None))
        .distinct()
        .order_by(Course.category)
    ).all()
    return list(rows)


def get_course(db: Session, course_id: int, identity: Identity | None = None) -> tuple[Course, bool]:
    course = db.get(Course, course_id)
    if not course:
        raise NotFound("Course not found")

    fav = is_favorited(db, identity.id, course.id) if identity else False
    return course, fav


def create_course(db: Session, data: dict) -> Course:
    if not data.get("title") or not data.get("price"):
        raise ValidationError("Course title and price are required")

    course = Course(
        title=data["title"],
        description=data.get("description"),
        category=data.get("category"),
        subject=data.get("subject"),
        brand=data.get("brand"),
        teacher=data.get("teacher"),
        teacher_bio=data.get("teacher_bio"),
        duration=data.get("duration"),
        lessons=data.get("lessons") or 0,
        price=data["price"],
        original_price=data.get("original_price") or data["price"],
        image_url=data.get("image_url"),
        highlights=data.get("highlights") or [],
        status=CourseStatus.active,
    )
    db.add(course)
    db.commit()
    db.refresh(course)

    logger.info("Course created id=%s", course.id)
    return course


def update_course(db: Session, course_id: int, data: dict) -> Course:
    course = db.get(Course, course_id)
    if not course:
        raise NotFound("Course not found")

    # 只更新有給值的欄位
    for k, v in data.items():
        if k in EDITABLE_FIELDS and v is not None:
            setattr(course, k, v)

    db.commit()
    db.refresh(course)
    return course


def delete_course(db: Session, course_id: int) -> None:
    result = db.execute(delete(Course).where(Course.id == course_id))
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("Course not found")
    db.commit()
    logger.info("Course deleted id=%s", course_id)
