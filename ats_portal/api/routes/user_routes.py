"""
User Routes

GET    /users          - Admin listing
GET    /users/stats    - Totals for the admin dashboard
GET    /users/export   - Filtered, sorted listing as CSV or JSON
GET    /users/{id}     - Full profile
PUT    /users/{id}     - Partial profile update
DELETE /users/{id}     - Remove user
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from ats_portal.schemas.schemas import (
    ExportFormat, MessageResponse, SortField, SortOrder,
    UserProfile, UserStats, UserSummary, UserUpdate
)
from ats_portal.services import admin_service
from ats_portal.services.user_service import UserService, get_user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserSummary])
async def list_users(users: UserService = Depends(get_user_service)):
    """All users, in registration order."""
    return users.list_users()


@router.get("/stats", response_model=UserStats)
async def user_stats(users: UserService = Depends(get_user_service)):
    return admin_service.user_stats(users.list_users())


@router.get("/export")
async def export_users(
    fmt: ExportFormat = Query(ExportFormat.csv, alias="format"),
    search: str = Query(""),
    status: str = Query("all"),
    sort_by: SortField = Query(SortField.name),
    order: SortOrder = Query(SortOrder.asc),
    users: UserService = Depends(get_user_service)
):
    """
    Download the listing as the admin currently sees it.

    Same filter/sort as the dashboard table: substring search over name,
    email and job role, optional status, then a stable sort.
    """
    rows = admin_service.filter_users(users.list_users(), search=search, status=status)
    rows = admin_service.sort_users(rows, sort_by=sort_by, order=order)

    if fmt == ExportFormat.json:
        body, media_type, filename = admin_service.export_json(rows), "application/json", "students_data.json"
    else:
        body, media_type, filename = admin_service.export_csv(rows), "text/csv", "students_data.csv"

    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/{user_id}", response_model=UserProfile)
async def get_user(user_id: str, users: UserService = Depends(get_user_service)):
    """Profile including the latest analysis fields."""
    return users.get_user(user_id)


@router.put("/{user_id}", response_model=UserProfile)
async def update_user(user_id: str, data: UserUpdate, users: UserService = Depends(get_user_service)):
    """Update profile. Only provided fields are updated."""
    return users.update_user(user_id, data.model_dump(exclude_unset=True))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, users: UserService = Depends(get_user_service)):
    users.delete_user(user_id)
    return MessageResponse(message="User removed")
