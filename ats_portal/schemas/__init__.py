"""
Schemas module - Request/Response schemas for API endpoints.
"""

from ats_portal.schemas.schemas import (
    AtsAnalysis,
    LoginResponse,
    MatchAnalysis,
    UserProfile,
    UserSummary,
)

__all__ = [
    "AtsAnalysis",
    "LoginResponse",
    "MatchAnalysis",
    "UserProfile",
    "UserSummary",
]
