from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from prephub.models.enums import CourseStatus


class CourseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    subject: Optional[str] = None
    brand: Optional[str] = None
    teacher: Optional[str] = None
    teacher_bio: Optional[str] = None
    duration: Optional[str] = None
    lessons: int = 0
    price: int
    original_price: Optional[int] = None
    rating: float = 0
    reviews_count: int = 0
    students_count: int = 0
    image_url: Optional[str] = None
    highlights: list[str] = []
    status: CourseStatus
    created_at: Optional[datetime] = None


class CourseListOut(BaseModel):
    courses: list[CourseOut]
    total: int
    limit: int
    offset: int


class CourseDetailOut(BaseModel):
    course: CourseOut
    isFavorited: bool


class CategoriesOut(BaseModel):
    categories: list[str]


class CourseCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    subject: Optional[str] = None
    brand: Optional[str] = None
    teacher: Optional[str] = None
    teacher_bio: Optional[str] = None
    duration: Optional[str] = None
    lessons: Optional[int] = None
    price: Optional[int] = None
    original_price: Optional[int] = None
    image_url: Optional[str] = None
    highlights: Optional[list[str]] = None


class CourseUpdate(CourseCreate):
    rating: Optional[float] = None
    reviews_count: Optional[int] = None
    students_count: Optional[int] = None
    status: Optional[CourseStatus] = None


class CourseCreatedOut(BaseModel):
    message: str
    courseId: int
