"""Favorites relation: one row per (user, course) pair."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from prephub.errors import Conflict, NotFound
from prephub.models import Course, Favorite

import logging
logger = logging.getLogger("prephub.favorites")


def list_favorites(db: Session, user_id: int) -> list[tuple[Course, datetime]]:
    rows = db.execute(
        select(Course, Favorite.created_at)
        .join(Favorite, Favorite.course_id == Course.id)
        .where(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
    ).all()
    return [(course, favorited_at) for course, favorited_at in rows]


def is_favorited(db: Session, user_id: int, course_id: int) -> bool:
    found = db.scalar(
        select(Favorite.id).where(
            Favorite.user_id == user_id,
            Favorite.course_id == course_id,
        )
    )
    return found is not None


def add_favorite(db: Session, user_id: int, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if not course:
        raise NotFound("Course not found")

    if is_favorited(db, user_id, course_id):
        raise Conflict("Already in favorites")

    db.add(Favorite(user_id=user_id, course_id=course_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if is_favorited(db, user_id, course_id):
            raise Conflict("Already in favorites")
        # user 已被刪除但 token 仍有效
        raise NotFound("User not found")

    logger.info("Favorite added user_id=%s course_id=%s", user_id, course_id)
    return course


def remove_favorite(db: Session, user_id: int, course_id: int) -> None:
    result = db.execute(
        delete(Favorite).where(
            Favorite.user_id == user_id,
            Favorite.course_id == course_id,
        )
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("Favorite not found")
    db.commit()
    logger.info("Favorite removed user_id=%s course_id=%s", user_id, course_id)
