from sqlalchemy import func, select
from sqlalchemy.orm import Session

from prephub.models import Brand, Course, Favorite, User


def dashboard_counts(db: Session) -> dict[str, int]:
    return {
        "courses": db.scalar(select(func.count(Course.id))) or 0,
        "users": db.scalar(select(func.count(User.id))) or 0,
        "brands": db.scalar(select(func.count(Brand.id))) or 0,
        "favorites": db.scalar(select(func.count(Favorite.id))) or 0,
    }
