# prephub/routers/courses.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from prephub.database import get_db
from prephub.schemas.course import (
    CategoriesOut,
    CourseCreate,
    CourseCreatedOut,
    CourseDetailOut,
    CourseListOut,
    CourseOut,
    CourseUpdate,
)
from prephub.schemas.user import MessageOut
from prephub.services import catalog
from prephub.services.catalog import CourseFilters
from prephub.utils.auth import Identity, OptionalAuth, get_optional_auth, require_admin
from prephub.utils.excel_export import make_filename, rows_to_xlsx_bytes

import logging
logger = logging.getLogger("prephub.courses")


router = APIRouter(prefix="/api/courses", tags=["Courses"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("", response_model=CourseListOut)
def list_courses(
    db: Session = Depends(get_db),
    auth: OptionalAuth = Depends(get_optional_auth),

    category: Optional[str] = Query(None, description="Exact category"),
    brand: Optional[str] = Query(None, description="Exact brand name"),
    subject: Optional[str] = Query(None, description="Exact subject"),
    search: Optional[str] = Query(None, description="Substring of title / description / teacher"),
    sort: Optional[str] = Query(None, description="price_asc | price_desc | rating | popular | newest"),

    # 不用 int，非數字時改用預設值而不是 422
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
):
    filters = CourseFilters.from_query(
        category=category, brand=brand, subject=subject, search=search,
        sort=sort, limit=limit, offset=offset,
    )
    courses, total = catalog.list_courses(db, filters)
    return CourseListOut(
        courses=[CourseOut.model_validate(c) for c in courses],
        total=total,
        limit=filters.limit,
        offset=filters.offset,
    )


@router.get("/categories/list", response_model=CategoriesOut)
def list_categories(db: Session = Depends(get_db)):
    return CategoriesOut(categories=catalog.list_categories(db))


@router.get("/export")
def export_courses_excel(
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),

    category: Optional[str] = Query(None),
    brand: Optional[str] = Query(None),
    subject: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
):
    """
    匯出「課程查詢結果」成 Excel（.xlsx），不分頁
    """
    filters = CourseFilters.from_query(
        category=category, brand=brand, subject=subject, search=search, sort=sort,
    )
    rows = catalog.export_rows(db, filters)
    content = rows_to_xlsx_bytes(rows)
    filename = make_filename("courses")

    logger.info("Catalog exported rows=%d by admin_id=%s", len(rows), admin.id)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{course_id}", response_model=CourseDetailOut)
def get_course(
    course_id: int,
    db: Session = Depends(get_db),
    auth: OptionalAuth = Depends(get_optional_auth),
):
    course, is_favorited = catalog.get_course(db, course_id, auth.identity)
    return CourseDetailOut(course=CourseOut.model_validate(course), isFavorited=is_favorited)


# 只有管理者可以新增
@router.post("", response_model=CourseCreatedOut, status_code=201)
def create_course(
    body: CourseCreate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    course = catalog.create_course(db, body.model_dump())
    return CourseCreatedOut(message="Course created", courseId=course.id)


#只有管理者可以修改
@router.put("/{course_id}", response_model=MessageOut)
def update_course(
    course_id: int,
    body: CourseUpdate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    catalog.update_course(db, course_id, body.model_dump(exclude_unset=True))
    return MessageOut(message="Course updated")


# 只有管理者可以刪除
@router.delete("/{course_id}", response_model=MessageOut)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    catalog.delete_course(db, course_id)
    return MessageOut(message="Course deleted")
