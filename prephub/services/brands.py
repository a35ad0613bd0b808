from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from prephub.errors import NotFound, ValidationError
from prephub.models import Brand, Course, CourseStatus
from prephub.models.brand import DEFAULT_LOGO

import logging
logger = logging.getLogger("prephub.brands")


def list_brands(db: Session) -> list[Brand]:
    return list(db.scalars(select(Brand).order_by(Brand.name, Brand.id)).all())


def get_brand(db: Session, brand_id: int) -> tuple[Brand, list[Course]]:
    brand = db.get(Brand, brand_id)
    if not brand:
        raise NotFound("Brand not found")

    # 該機構上架中的課程
    courses = db.scalars(
        select(Course)
        .where(Course.brand == brand.name, Course.status == CourseStatus.active)
        .order_by(Course.rating.desc(), Course.id.desc())
    ).all()
    return brand, list(courses)


def create_brand(db: Session, name, description=None, logo=None) -> Brand:
    if not name or not name.strip():
        raise ValidationError("Brand name is required")

    brand = Brand(name=name.strip(), description=description, logo=logo or DEFAULT_LOGO)
    db.add(brand)
    db.commit()
    db.refresh(brand)

    logger.info("Brand created id=%s", brand.id)
    return brand


def update_brand(db: Session, brand_id: int, name=None, description=None, logo=None) -> Brand:
    brand = db.get(Brand, brand_id)
    if not brand:
        raise NotFound("Brand not found")

    if name:
        brand.name = name.strip()
    if description:
        brand.description = description
    if logo:
        brand.logo = logo

    db.commit()
    db.refresh(brand)
    return brand


def delete_brand(db: Session, brand_id: int) -> None:
    result = db.execute(delete(Brand).where(Brand.id == brand_id))
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("Brand not found")
    db.commit()
    logger.info("Brand deleted id=%s", brand_id)
