# tests/test_course_service.py
import httpx
import pytest

from ats_portal.core.errors import UpstreamError
from ats_portal.services.course_service import CourseService, format_duration, get_course_service


def test_format_duration():
    assert format_duration("PT1H2M3S") == "1:02:03"
    assert format_duration("PT4M5S") == "04:05"
    assert format_duration("PT45S") == "00:45"
    assert format_duration(None) == ""
    assert format_duration("P1D") == ""


def _handler(request):
    if request.url.path.endswith("/search"):
        assert request.url.params["q"] == "react tutorial"
        assert request.url.params["key"] == "test-key"
        return httpx.Response(200, json={
            "nextPageToken": "NEXT",
            "items": [{
                "id": {"videoId": "abc123"},
                "snippet": {
                    "title": "React in 1 hour",
                    "channelTitle": "Dev Channel",
                    "thumbnails": {"medium": {"url": "https://img/abc.jpg"}},
                },
            }],
        })
    assert request.url.params["id"] == "abc123"
    return httpx.Response(200, json={"items": [{"id": "abc123", "contentDetails": {"duration": "PT1H0M5S"}}]})


def test_search_courses():
    http = httpx.Client(transport=httpx.MockTransport(_handler))
    service = CourseService(http_client=http, api_key="test-key", base_url="https://yt.test/v3")
    result = service.search_courses("react tutorial")
    assert result == {
        "videos": [{
            "id": "abc123",
            "title": "React in 1 hour",
            "thumbnail": "https://img/abc.jpg",
            "instructor": "Dev Channel",
            "duration": "1:00:05",
            "link": "https://www.youtube.com/watch?v=abc123",
        }],
        "nextPageToken": "NEXT",
    }


def test_search_requires_key():
    with pytest.raises(UpstreamError):
        CourseService(http_client=httpx.Client(), api_key="").search_courses("react")


def test_upstream_failure():
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(403)))
    service = CourseService(http_client=http, api_key="k", base_url="https://yt.test/v3")
    with pytest.raises(UpstreamError):
        service.search_courses("react")


def test_courses_route(client, monkeypatch):
    from ats_portal.main import app

    http = httpx.Client(transport=httpx.MockTransport(_handler))
    app.dependency_overrides[get_course_service] = lambda: CourseService(
        http_client=http, api_key="test-key", base_url="https://yt.test/v3"
    )
    r = client.get("/courses", params={"query": "react tutorial"})
    assert r.status_code == 200
    assert r.json()["videos"][0]["duration"] == "1:00:05"


def test_course_dependency_closes_its_client():
    dependency = get_course_service()
    service = next(dependency)
    assert not service.http.is_closed
    dependency.close()
    assert service.http.is_closed


def test_injected_client_left_open():
    http = httpx.Client(transport=httpx.MockTransport(_handler))
    CourseService(http_client=http, api_key="k").close()
    assert not http.is_closed
