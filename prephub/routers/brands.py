from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from prephub.database import get_db
from prephub.schemas.brand import (
    BrandCreatedOut,
    BrandDetailOut,
    BrandIn,
    BrandListOut,
    BrandOut,
)
from prephub.schemas.course import CourseOut
from prephub.schemas.user import MessageOut
from prephub.services import brands as brands_service
from prephub.utils.auth import Identity, require_admin


router = APIRouter(prefix="/api/brands", tags=["Brands"])


@router.get("", response_model=BrandListOut)
def list_brands(db: Session = Depends(get_db)):
    return BrandListOut(brands=[BrandOut.model_validate(b) for b in brands_service.list_brands(db)])


@router.get("/{brand_id}", response_model=BrandDetailOut)
def get_brand(brand_id: int, db: Session = Depends(get_db)):
    brand, courses = brands_service.get_brand(db, brand_id)
    return BrandDetailOut(
        brand=BrandOut.model_validate(brand),
        courses=[CourseOut.model_validate(c) for c in courses],
    )


@router.post("", response_model=BrandCreatedOut, status_code=201)
def create_brand(
    body: BrandIn,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    brand = brands_service.create_brand(db, body.name, body.description, body.logo)
    return BrandCreatedOut(message="Brand created", brandId=brand.id)


@router.put("/{brand_id}", response_model=MessageOut)
def update_brand(
    brand_id: int,
    body: BrandIn,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    brands_service.update_brand(db, brand_id, body.name, body.description, body.logo)
    return MessageOut(message="Brand updated")


@router.delete("/{brand_id}", response_model=MessageOut)
def delete_brand(
    brand_id: int,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    brands_service.delete_brand(db, brand_id)
    return MessageOut(message="Brand deleted")
