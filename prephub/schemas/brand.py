from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from prephub.schemas.course import CourseOut


class BrandIn(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None


class BrandOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    logo: Optional[str] = None
    courses_count: int = 0
    created_at: Optional[datetime] = None


class BrandListOut(BaseModel):
    brands: list[BrandOut]


class BrandDetailOut(BaseModel):
    brand: BrandOut
    courses: list[CourseOut]


class BrandCreatedOut(BaseModel):
    message: str
    brandId: int
