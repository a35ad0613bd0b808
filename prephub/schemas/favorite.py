from datetime import datetime

from pydantic import BaseModel

from prephub.schemas.course import CourseOut


class FavoriteCourseOut(CourseOut):
    # 收藏時間
    favorited_at: datetime


class FavoriteListOut(BaseModel):
    favorites: list[FavoriteCourseOut]
    count: int


class FavoriteAddedOut(BaseModel):
    message: str
    course: str


class FavoriteCheckOut(BaseModel):
    isFavorited: bool
