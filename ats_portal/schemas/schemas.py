"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Wire names follow the frontend (camelCase for profile fields, snake_case
for signup and analysis payloads).
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    admin = "admin"


class SortField(str, Enum):
    name = "name"
    ats_score = "atsScore"
    date = "date"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class ExportFormat(str, Enum):
    csv = "csv"
    json = "json"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SignupRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str


class SessionUser(BaseModel):
    uid: str
    email: str
    firstName: str
    lastName: str
    role: str


class LoginResponse(BaseModel):
    message: str
    user: SessionUser


class MessageResponse(BaseModel):
    message: str


# ============================================================
# USER SCHEMAS
# ============================================================

class UserSummary(BaseModel):
    """One row of the admin listing."""
    id: str
    firstName: str
    lastName: str
    email: str
    timestamp: Optional[datetime] = None
    role: str = UserRole.student.value
    contact: str = ""
    address: str = ""
    jobRole: str = ""
    status: str = "active"
    atsScore: float = 0


class UserProfile(BaseModel):
    id: str = Field(..., serialization_alias="_id")
    firstName: str
    lastName: str
    email: str
    contact: str = ""
    address: str = ""
    jobRole: str = ""
    role: str = UserRole.student.value
    gender: str = ""
    status: str = "active"
    skills: List[str] = []
    atsScore: float = 0
    resumeStrength: List[str] = []
    resumeWeakness: List[str] = []
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class UserUpdate(BaseModel):
    """Partial profile update. Omitted fields are left untouched."""
    firstName: Optional[str] = Field(None, min_length=1, max_length=100)
    lastName: Optional[str] = Field(None, min_length=1, max_length=100)
    contact: Optional[str] = None
    address: Optional[str] = None
    jobRole: Optional[str] = None
    gender: Optional[str] = None
    skills: Optional[List[str]] = None
    atsScore: Optional[float] = Field(None, ge=0, le=100)
    resumeStrength: Optional[List[str]] = None
    resumeWeakness: Optional[List[str]] = None


class UserStats(BaseModel):
    total: int
    active: int
    withResume: int
    avgAtsScore: int


# ============================================================
# ANALYSIS SCHEMAS
# ============================================================

class MatchAnalysis(BaseModel):
    """Resume compared against a supplied job description."""
    match: float = 0
    missing_keywords: List[str] = []
    match_keywords: List[str] = []
    summary: str = ""


class AtsAnalysis(BaseModel):
    """Resume scored against its own stated focus."""
    match: float = 0
    strengths: List[str] = []
    weaknesses: List[str] = []
    summary: str = ""


class SkillSuggestionRequest(BaseModel):
    role: Optional[str] = None


# ============================================================
# COURSE SCHEMAS
# ============================================================

class CourseVideo(BaseModel):
    id: str
    title: str
    thumbnail: Optional[str] = None
    instructor: str = ""
    duration: str = ""
    link: str


class CourseResponse(BaseModel):
    videos: List[CourseVideo] = []
    nextPageToken: Optional[str] = None
