"""
Course Routes

GET /courses - YouTube tutorials for a role or skill
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from ats_portal.schemas.schemas import CourseResponse
from ats_portal.services.course_service import CourseService, get_course_service

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get("", response_model=CourseResponse)
async def search_courses(
    query: str = Query(..., min_length=1),
    page_token: Optional[str] = Query(None),
    max_results: int = Query(9, ge=1, le=50),
    courses: CourseService = Depends(get_course_service)
):
    return await run_in_threadpool(courses.search_courses, query, page_token, max_results)
