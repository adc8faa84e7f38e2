"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from ats_portal.api.routes.auth_routes import router as auth_router
from ats_portal.api.routes.user_routes import router as user_router
from ats_portal.api.routes.analyze_routes import router as analyze_router
from ats_portal.api.routes.course_routes import router as course_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(analyze_router)
api_router.include_router(course_router)
