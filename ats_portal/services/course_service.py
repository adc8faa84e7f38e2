"""
Course Suggestion Service - YouTube tutorials for a role or skill.

Two YouTube Data API calls per lookup:
1. /search  -> video ids, titles, thumbnails, channel names
2. /videos  -> contentDetails.duration for those ids
"""

import logging
import re
from typing import Iterator, Optional

import httpx

from ats_portal.core.config import get_settings
from ats_portal.core.errors import UpstreamError

logger = logging.getLogger(__name__)


DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def format_duration(iso_duration: Optional[str]) -> str:
    """PT1H2M3S -> "1:02:03", PT4M5S -> "04:05", unknown -> ""."""
    match = DURATION_PATTERN.fullmatch(iso_duration or "")
    if not match:
        return ""
    hours, minutes, seconds = (int(part or 0) for part in match.groups())
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


class CourseService:

    def __init__(self, http_client: httpx.Client = None, api_key: str = None, base_url: str = None):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.youtube_api_key
        self.base_url = (base_url or settings.youtube_api_url).rstrip("/")
        self._owns_http = http_client is None
        self.http = http_client or httpx.Client(timeout=10.0)

    def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._owns_http:
            self.http.close()

    def _get(self, path: str, params: dict) -> dict:
        params = dict(params, key=self.api_key)
        try:
            response = self.http.get(f"{self.base_url}/{path}", params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("YouTube request %s failed: %s", path, e)
            raise UpstreamError("Video search failed")
        return response.json()

    def search_courses(self, query: str, page_token: str = None, max_results: int = 9) -> dict:
        """
        Returns:
            {"videos": [{id, title, thumbnail, instructor, duration, link}],
             "nextPageToken": str or None}
        """
        if not self.api_key:
            raise UpstreamError("Video search is not configured")

        params = {
            "part": "snippet",
            "type": "video",
            "q": query,
            "maxResults": max_results,
        }
        if page_token:
            params["pageToken"] = page_token
        search = self._get("search", params)

        items = [item for item in search.get("items", []) if item.get("id", {}).get("videoId")]
        if not items:
            return {"videos": [], "nextPageToken": search.get("nextPageToken")}

        ids = [item["id"]["videoId"] for item in items]
        details = self._get("videos", {"part": "contentDetails", "id": ",".join(ids)})
        durations = {
            d.get("id"): d.get("contentDetails", {}).get("duration")
            for d in details.get("items", [])
        }

        videos = []
        for item in items:
            video_id = item["id"]["videoId"]
            snippet = item.get("snippet", {})
            thumbnails = snippet.get("thumbnails", {})
            thumb = thumbnails.get("medium") or thumbnails.get("default") or {}
            videos.append({
                "id": video_id,
                "title": snippet.get("title", ""),
                "thumbnail": thumb.get("url"),
                "instructor": snippet.get("channelTitle", ""),
                "duration": format_duration(durations.get(video_id)),
                "link": f"https://www.youtube.com/watch?v={video_id}",
            })
        return {"videos": videos, "nextPageToken": search.get("nextPageToken")}


def get_course_service() -> Iterator[CourseService]:
    """One service per request, closed once the response is sent."""
    service = CourseService()
    try:
        yield service
    finally:
        service.close()
