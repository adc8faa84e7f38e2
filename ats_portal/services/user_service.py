"""
User Service - credential store and profile CRUD over the `users` collection.

One document per person:
- identity:  email (unique), password (bcrypt hash), firstName, lastName
- profile:   contact, address, jobRole, gender, status, role, skills
- analysis:  atsScore, resumeStrength, resumeWeakness
- bookkeeping: createdAt, updatedAt
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ats_portal.core.auth import hash_password, verify_password, resolve_role
from ats_portal.core.errors import DuplicateEmail, InvalidCredentials, UserNotFound
from ats_portal.db.mongodb import get_users_collection

logger = logging.getLogger(__name__)

# Fields a profile update may overwrite. Email, password and role are not
# editable through the profile screen.
UPDATABLE_FIELDS = (
    "firstName", "lastName", "contact", "address", "jobRole", "gender",
    "skills", "atsScore", "resumeStrength", "resumeWeakness",
)

PROFILE_DEFAULTS = {
    "contact": "",
    "address": "",
    "jobRole": "Student",
    "status": "active",
    "role": "student",
    "gender": "male",
    "skills": [],
    "atsScore": 0,
    "resumeStrength": [],
    "resumeWeakness": [],
}


# ============================================================
# HELPERS: Convert documents to API shapes
# ============================================================

def _now() -> datetime:
    return datetime.now(timezone.utc)


def _object_id(user_id: str) -> ObjectId:
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        raise UserNotFound()


def clamp_score(value: Any) -> float:
    """Coerce to a number in [0, 100]; anything unusable becomes 0."""
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0
    if score != score:  # NaN
        return 0
    return max(0.0, min(100.0, score))


def serialize_summary(doc: dict) -> dict:
    """Row for the admin listing."""
    return {
        "id": str(doc["_id"]),
        "firstName": doc.get("firstName", ""),
        "lastName": doc.get("lastName", ""),
        "email": doc.get("email", ""),
        "timestamp": doc.get("createdAt"),
        "role": doc.get("role") or "student",
        "contact": doc.get("contact", ""),
        "address": doc.get("address", ""),
        "jobRole": doc.get("jobRole", ""),
        "status": doc.get("status", "active"),
        "atsScore": doc.get("atsScore", 0) or 0,
    }


def serialize_profile(doc: dict) -> dict:
    """Full profile without the password hash."""
    profile = {key: doc.get(key, copy.copy(default)) for key, default in PROFILE_DEFAULTS.items()}
    profile.update({
        "id": str(doc["_id"]),
        "firstName": doc.get("firstName", ""),
        "lastName": doc.get("lastName", ""),
        "email": doc.get("email", ""),
        "createdAt": doc.get("createdAt"),
        "updatedAt": doc.get("updatedAt"),
    })
    return profile


# ============================================================
# USERS COLLECTION
# ============================================================

class UserService:
    """
    Handles account creation, login checks and profile edits.
    """

    def __init__(self, collection: Collection = None):
        self.collection: Collection = collection if collection is not None else get_users_collection()

    def signup(self, first_name: str, last_name: str, email: str, password: str) -> str:
        """
        Create a student account.

        Returns:
            MongoDB ObjectId of the new user as string

        Raises:
            DuplicateEmail if the address is taken (checked up front, and
            enforced by the unique index for concurrent signups)
        """
        if self.collection.find_one({"email": email}, {"_id": 1}):
            logger.info("Signup rejected, email already registered")
            raise DuplicateEmail()

        now = _now()
        doc = dict(PROFILE_DEFAULTS)
        doc.update({
            "firstName": first_name,
            "lastName": last_name,
            "email": email,
            "password": hash_password(password),
            "skills": [],
            "resumeStrength": [],
            "resumeWeakness": [],
            "createdAt": now,
            "updatedAt": now,
        })
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateEmail()
        return str(result.inserted_id)

    def login(self, email: str, password: str) -> dict:
        """
        Check credentials and return the public session view.

        The same error is raised for an unknown email and a wrong password.
        """
        doc = self.collection.find_one({"email": email})
        if not doc or not verify_password(password, doc.get("password", "")):
            logger.info("Login failed")
            raise InvalidCredentials()

        return {
            "uid": str(doc["_id"]),
            "email": doc["email"],
            "firstName": doc.get("firstName", ""),
            "lastName": doc.get("lastName", ""),
            "role": resolve_role(doc["email"], doc.get("role")),
        }

    def list_users(self) -> List[dict]:
        """All users as listing rows, in insertion order."""
        return [serialize_summary(doc) for doc in self.collection.find({}, {"password": 0})]

    def get_user(self, user_id: str) -> dict:
        doc = self.collection.find_one({"_id": _object_id(user_id)}, {"password": 0})
        if doc is None:
            raise UserNotFound()
        return serialize_profile(doc)

    def update_user(self, user_id: str, fields: Dict[str, Any]) -> dict:
        """
        Overwrite only the given profile fields.

        Unknown keys and None values are ignored, so a body carrying just
        {"address": ...} leaves every other field as it was.
        """
        changes = {
            key: value for key, value in fields.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if "atsScore" in changes:
            changes["atsScore"] = clamp_score(changes["atsScore"])
        changes["updatedAt"] = _now()

        doc = self.collection.find_one_and_update(
            {"_id": _object_id(user_id)},
            {"$set": changes},
            projection={"password": 0},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise UserNotFound()
        return serialize_profile(doc)

    def delete_user(self, user_id: str) -> None:
        result = self.collection.delete_one({"_id": _object_id(user_id)})
        if result.deleted_count == 0:
            raise UserNotFound()
        logger.info("Deleted user %s", user_id)

    def save_analysis(
        self,
        user_id: str,
        score: Any,
        strengths: Optional[List[str]] = None,
        weaknesses: Optional[List[str]] = None
    ) -> dict:
        """Store the latest resume analysis on the user's profile."""
        fields = {"atsScore": clamp_score(score)}
        if strengths is not None:
            fields["resumeStrength"] = list(strengths)
        if weaknesses is not None:
            fields["resumeWeakness"] = list(weaknesses)
        return self.update_user(user_id, fields)


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_user_service(collection: Collection = Depends(get_users_collection)) -> UserService:
    """Get user service instance (FastAPI dependency)."""
    return UserService(collection)
