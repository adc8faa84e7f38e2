"""
Admin Listing Service

Derived views over the user listing for the admin dashboard:
- filter: case-insensitive substring over "first last email jobRole",
  optional status filter
- sort:   by name, ATS score or registration date (stable)
- export: CSV or JSON of the filtered, sorted rows
- stats:  totals and the average score of users who have one
"""

import csv
import io
import json
from datetime import datetime, timezone
from typing import List, Optional

from ats_portal.schemas.schemas import SortField, SortOrder


CSV_HEADERS = [
    "ID",
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Job Role",
    "ATS Score",
    "Status",
    "Registration Date",
]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_aware(value: Optional[datetime]) -> datetime:
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _sort_key(field: SortField):
    if field == SortField.name:
        return lambda u: f"{u['firstName']} {u['lastName']}".lower()
    if field == SortField.ats_score:
        return lambda u: u.get("atsScore") or 0
    return lambda u: _as_aware(u.get("timestamp"))


def filter_users(users: List[dict], search: str = "", status: str = "all") -> List[dict]:
    term = (search or "").lower()
    result = []
    for user in users:
        haystack = f"{user['firstName']} {user['lastName']} {user['email']} {user.get('jobRole', '')}".lower()
        if term and term not in haystack:
            continue
        if status and status != "all" and user.get("status") != status:
            continue
        result.append(user)
    return result


def sort_users(users: List[dict], sort_by: SortField = SortField.name, order: SortOrder = SortOrder.asc) -> List[dict]:
    # sorted() is stable in both directions, ties keep listing order
    return sorted(users, key=_sort_key(sort_by), reverse=order == SortOrder.desc)


def user_stats(users: List[dict]) -> dict:
    scored = [u["atsScore"] for u in users if (u.get("atsScore") or 0) > 0]
    return {
        "total": len(users),
        "active": sum(1 for u in users if u.get("status") == "active"),
        "withResume": len(scored),
        "avgAtsScore": round(sum(scored) / len(scored)) if scored else 0,
    }


def _registration_date(user: dict) -> str:
    stamp = user.get("timestamp")
    return stamp.strftime("%d %b %Y") if stamp else ""


def export_csv(users: List[dict]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for user in users:
        writer.writerow([
            user["id"],
            user["firstName"],
            user["lastName"],
            user["email"],
            user.get("contact") or "N/A",
            user.get("jobRole") or "Not set",
            user.get("atsScore") or 0,
            user.get("status") or "active",
            _registration_date(user),
        ])
    return buffer.getvalue()


def export_json(users: List[dict]) -> str:
    rows = []
    for user in users:
        row = dict(user)
        stamp = row.get("timestamp")
        row["timestamp"] = stamp.isoformat() if stamp else None
        rows.append(row)
    return json.dumps(rows, indent=2)
