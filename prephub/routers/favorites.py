# prephub/routers/favorites.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from prephub.database import get_db
from prephub.schemas.course import CourseOut
from prephub.schemas.favorite import (
    FavoriteAddedOut,
    FavoriteCheckOut,
    FavoriteCourseOut,
    FavoriteListOut,
)
from prephub.schemas.user import MessageOut
from prephub.services import favorites as favorites_service
from prephub.utils.auth import Identity, get_current_identity


router = APIRouter(prefix="/api/favorites", tags=["Favorites"])


# 查看收藏
@router.get("", response_model=FavoriteListOut)
def list_my_favorites(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    rows = favorites_service.list_favorites(db, identity.id)
    items = [
        FavoriteCourseOut(
            **CourseOut.model_validate(course).model_dump(),
            favorited_at=favorited_at,
        )
        for course, favorited_at in rows
    ]
    return FavoriteListOut(favorites=items, count=len(items))


@router.get("/check/{course_id}", response_model=FavoriteCheckOut)
def check_favorite(
    course_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return FavoriteCheckOut(isFavorited=favorites_service.is_favorited(db, identity.id, course_id))


# 收藏課程
@router.post("/{course_id}", response_model=FavoriteAddedOut, status_code=201)
def add_favorite(
    course_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    course = favorites_service.add_favorite(db, identity.id, course_id)
    return FavoriteAddedOut(message="Added to favorites", course=course.title)


# 移除收藏
@router.delete("/{course_id}", response_model=MessageOut)
def remove_favorite(
    course_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    favorites_service.remove_favorite(db, identity.id, course_id)
    return MessageOut(message="Removed from favorites")
