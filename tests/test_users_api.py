# tests/test_users_api.py
import csv
import io

from bson import ObjectId

from ats_portal.services.user_service import PROFILE_DEFAULTS, serialize_profile


def _uid(client, email="jane@example.com", password="secret123"):
    return client.post("/login", json={"email": email, "password": password}).json()["user"]["uid"]


def test_list_users(client, signup):
    signup()
    signup(email="sam@example.com", first_name="Sam", last_name="Lee")
    users = client.get("/users").json()
    assert [u["email"] for u in users] == ["jane@example.com", "sam@example.com"]
    assert users[0]["jobRole"] == "Student"
    assert users[0]["status"] == "active"
    assert "password" not in users[0]


def test_get_user_profile(client, signup):
    signup()
    uid = _uid(client)
    r = client.get(f"/users/{uid}")
    assert r.status_code == 200
    profile = r.json()
    assert profile["_id"] == uid
    assert profile["firstName"] == "Jane"
    assert profile["atsScore"] == 0
    assert profile["resumeStrength"] == []
    assert "password" not in profile


def test_get_missing_or_malformed_user(client):
    assert client.get("/users/5f1d7f1d7f1d7f1d7f1d7f1d").status_code == 404
    assert client.get("/users/not-an-id").status_code == 404


def test_partial_update_leaves_other_fields(client, signup):
    signup()
    uid = _uid(client)
    r = client.put(f"/users/{uid}", json={"address": "12 Park Street"})
    assert r.status_code == 200
    profile = r.json()
    assert profile["address"] == "12 Park Street"
    assert profile["firstName"] == "Jane"
    assert profile["lastName"] == "Doe"
    assert profile["jobRole"] == "Student"


def test_update_analysis_fields(client, signup):
    signup()
    uid = _uid(client)
    r = client.put(f"/users/{uid}", json={
        "skills": ["python", "sql"],
        "atsScore": 82,
        "resumeStrength": ["APIs"],
        "resumeWeakness": ["testing"],
    })
    profile = client.get(f"/users/{uid}").json()
    assert r.status_code == 200
    assert profile["skills"] == ["python", "sql"]
    assert profile["atsScore"] == 82
    assert profile["resumeWeakness"] == ["testing"]


def test_update_cannot_change_email_or_role(client, signup, users_collection):
    signup()
    uid = _uid(client)
    client.put(f"/users/{uid}", json={"email": "evil@example.com", "role": "admin"})
    doc = users_collection.find_one({"firstName": "Jane"})
    assert doc["email"] == "jane@example.com"
    assert doc["role"] == "student"


def test_update_rejects_out_of_range_score(client, signup):
    signup()
    uid = _uid(client)
    assert client.put(f"/users/{uid}", json={"atsScore": 140}).status_code == 422


def test_update_missing_user(client):
    r = client.put("/users/5f1d7f1d7f1d7f1d7f1d7f1d", json={"address": "x"})
    assert r.status_code == 404


def test_delete_user(client, signup):
    signup()
    uid = _uid(client)
    r = client.delete(f"/users/{uid}")
    assert r.status_code == 200
    assert r.json() == {"message": "User removed"}
    assert client.get(f"/users/{uid}").status_code == 404
    assert client.delete(f"/users/{uid}").status_code == 404


def test_stats(client, signup):
    signup()
    signup(email="sam@example.com", first_name="Sam")
    signup(email="ana@example.com", first_name="Ana")
    client.put(f"/users/{_uid(client)}", json={"atsScore": 70})
    client.put(f"/users/{_uid(client, 'sam@example.com')}", json={"atsScore": 81})
    assert client.get("/users/stats").json() == {
        "total": 3,
        "active": 3,
        "withResume": 2,
        "avgAtsScore": 76,
    }


def test_export_csv_filtered_and_sorted(client, signup):
    signup(email="zoe@example.com", first_name="Zoe", last_name="Adams")
    signup(email="amy@example.com", first_name="Amy", last_name="Brown")
    signup(email="bob@other.org", first_name="Bob", last_name="Clark")

    r = client.get("/users/export", params={"format": "csv", "search": "EXAMPLE.com", "sort_by": "name"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "students_data.csv" in r.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0][:4] == ["ID", "First Name", "Last Name", "Email"]
    assert [row[1] for row in rows[1:]] == ["Amy", "Zoe"]


def test_export_json_by_score_desc(client, signup):
    signup(email="low@example.com", first_name="Low")
    signup(email="high@example.com", first_name="High")
    client.put(f"/users/{_uid(client, 'low@example.com')}", json={"atsScore": 10})
    client.put(f"/users/{_uid(client, 'high@example.com')}", json={"atsScore": 90})

    r = client.get("/users/export", params={"format": "json", "sort_by": "atsScore", "order": "desc"})
    assert r.status_code == 200
    assert [u["firstName"] for u in r.json()] == ["High", "Low"]


def test_profile_defaults_are_not_shared():
    profile = serialize_profile({"_id": ObjectId()})
    profile["skills"].append("python")
    profile["resumeStrength"].append("clear layout")
    assert PROFILE_DEFAULTS["skills"] == []
    assert PROFILE_DEFAULTS["resumeStrength"] == []
    assert serialize_profile({"_id": ObjectId()})["skills"] == []
