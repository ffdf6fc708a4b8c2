"""
Unit tests for the interview listing and lookup routes.
"""
import pytest
from bson import ObjectId


def create_interview(client, user_id, role="Backend Engineer"):
    response = client.post("/vapi/generate", json={
        "type": "mixed",
        "role": role,
        "level": "junior",
        "techstack": ["Python"],
        "amount": 5,
        "userid": user_id,
    })
    assert response.status_code == 200
    return response.json()["interviewId"]


def create_other_user(client):
    document = client.app.state.users.create("Bo", "bo@x.com", "not-a-real-hash")
    return str(document["_id"])


class TestUserInterviews:
    """Test GET /interviews/user."""

    def test_requires_session(self, client):
        assert client.get("/interviews/user").status_code == 401

    def test_lists_own_interviews_newest_first(self, client, signed_in):
        first = create_interview(client, signed_in["id"], role="First Role")
        second = create_interview(client, signed_in["id"], role="Second Role")
        create_interview(client, create_other_user(client))

        interviews = client.get("/interviews/user").json()["interviews"]

        ids = [interview["id"] for interview in interviews]
        assert set(ids) == {first, second}
        created = [interview["createdAt"] for interview in interviews]
        assert created == sorted(created, reverse=True)


class TestLatestInterviews:
    """Test GET /interviews/latest."""

    def test_excludes_own_interviews(self, client, signed_in):
        create_interview(client, signed_in["id"])
        other = create_interview(client, create_other_user(client))

        interviews = client.get("/interviews/latest").json()["interviews"]

        assert [interview["id"] for interview in interviews] == [other]
        assert all(interview["userId"] != signed_in["id"] for interview in interviews)

    def test_limit(self, client, signed_in):
        other_user = create_other_user(client)
        for _ in range(3):
            create_interview(client, other_user)

        response = client.get("/interviews/latest", params={"limit": 2})

        assert len(response.json()["interviews"]) == 2

    @pytest.mark.parametrize("limit", ["0", "101", "ten"])
    def test_limit_out_of_range(self, client, signed_in, limit):
        response = client.get("/interviews/latest", params={"limit": limit})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "limit", "message": "Limit must be between 1 and 100"}]

    def test_default_limit(self, client, signed_in):
        other_user = create_other_user(client)
        for _ in range(21):
            create_interview(client, other_user)

        assert len(client.get("/interviews/latest").json()["interviews"]) == 20

    def test_limit_checked_after_session(self, client):
        assert client.get("/interviews/latest", params={"limit": 0}).status_code == 401


class TestGetInterview:
    """Test GET /interviews/{id}."""

    def test_get_interview(self, client, signed_in):
        interview_id = create_interview(client, signed_in["id"])

        response = client.get(f"/interviews/{interview_id}")

        assert response.status_code == 200
        interview = response.json()["interview"]
        assert interview["id"] == interview_id
        assert interview["type"] == "Mixed"
        assert interview["level"] == "Junior"
        assert interview["coverImage"].startswith("/covers/")

    def test_unknown_interview(self, client, signed_in):
        response = client.get(f"/interviews/{ObjectId()}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Interview not found"}

    def test_malformed_id(self, client, signed_in):
        response = client.get("/interviews/not-an-id")

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "id", "message": "Invalid interview ID"}]

    def test_requires_session(self, client):
        assert client.get(f"/interviews/{ObjectId()}").status_code == 401
