"""
Unit tests for the MongoDB repositories.
"""
import pytest
from bson import ObjectId

from mock_interviewer.utils.errors import Conflict
from mock_interviewer.utils.repositories import FeedbackRepository, InterviewRepository, UserRepository


def interview_doc(user_id, created_at, finalized=True, role="Backend Engineer"):
    return {
        "role": role,
        "type": "Technical",
        "level": "Senior",
        "techstack": ["Go"],
        "questions": ["Why Go?"],
        "user_id": user_id,
        "finalized": finalized,
        "cover_image": "/covers/adobe.png",
        "created_at": created_at,
    }


def feedback_payload(interview_id, user_id, score=50, created_at="2024-01-01T00:00:00.000Z"):
    return {
        "interview_id": interview_id,
        "user_id": user_id,
        "total_score": score,
        "category_scores": [],
        "strengths": [],
        "areas_for_improvement": [],
        "final_assessment": "ok",
        "created_at": created_at,
    }


class TestUserRepository:
    """Test the credential store."""

    def test_create_normalizes_email(self, db):
        users = UserRepository(db)

        document = users.create("Ana", "  Ana@X.com ", "hash")

        assert document["email"] == "ana@x.com"
        assert users.find_by_email("ANA@x.com")["_id"] == document["_id"]
        assert users.get(str(document["_id"]))["name"] == "Ana"

    def test_duplicate_email_conflicts(self, db):
        users = UserRepository(db)
        users.create("Ana", "ana@x.com", "hash")

        with pytest.raises(Conflict):
            users.create("Other Ana", "ANA@x.com", "hash")

    def test_unknown_user(self, db):
        assert UserRepository(db).get(str(ObjectId())) is None


class TestInterviewRepository:
    """Test interview persistence and listing."""

    def test_list_by_user_newest_first(self, db):
        interviews = InterviewRepository(db)
        owner = str(ObjectId())
        older = interviews.create(interview_doc(owner, "2024-01-01T00:00:00.000Z"))
        newer = interviews.create(interview_doc(owner, "2024-02-01T00:00:00.000Z"))
        interviews.create(interview_doc(str(ObjectId()), "2024-03-01T00:00:00.000Z"))

        listed = [str(doc["_id"]) for doc in interviews.list_by_user(owner)]

        assert listed == [newer, older]

    def test_list_latest_excludes_own_and_unfinalized(self, db):
        interviews = InterviewRepository(db)
        me, other = str(ObjectId()), str(ObjectId())
        interviews.create(interview_doc(me, "2024-01-03T00:00:00.000Z"))
        hidden = interviews.create(interview_doc(other, "2024-01-04T00:00:00.000Z", finalized=False))
        first = interviews.create(interview_doc(other, "2024-01-01T00:00:00.000Z"))
        second = interviews.create(interview_doc(other, "2024-01-02T00:00:00.000Z"))

        listed = [str(doc["_id"]) for doc in interviews.list_latest(exclude_user_id=me, limit=10)]

        assert listed == [second, first]
        assert hidden not in listed

    def test_list_latest_respects_limit(self, db):
        interviews = InterviewRepository(db)
        other = str(ObjectId())
        for day in range(1, 6):
            interviews.create(interview_doc(other, f"2024-01-0{day}T00:00:00.000Z"))

        assert len(interviews.list_latest(exclude_user_id=str(ObjectId()), limit=3)) == 3

    def test_user_id_stored_as_object_id(self, db):
        interviews = InterviewRepository(db)
        owner = str(ObjectId())

        interview_id = interviews.create(interview_doc(owner, "2024-01-01T00:00:00.000Z"))

        assert interviews.get(interview_id)["user_id"] == ObjectId(owner)


class TestFeedbackRepository:
    """Test feedback create, overwrite and lookup."""

    def test_update_overwrites_same_record(self, db):
        feedback = FeedbackRepository(db)
        interview_id, user_id = str(ObjectId()), str(ObjectId())
        feedback_id = feedback.create(feedback_payload(interview_id, user_id, score=40))

        updated = feedback.update(feedback_id, feedback_payload(interview_id, user_id, score=90))

        assert str(updated["_id"]) == feedback_id
        assert updated["total_score"] == 90
        assert len(feedback.list_by_interview(interview_id, user_id)) == 1

    def test_update_requires_same_owner(self, db):
        feedback = FeedbackRepository(db)
        interview_id, owner = str(ObjectId()), str(ObjectId())
        feedback_id = feedback.create(feedback_payload(interview_id, owner))

        assert feedback.update(feedback_id, feedback_payload(interview_id, str(ObjectId()))) is None

    def test_update_unknown_id(self, db):
        feedback = FeedbackRepository(db)

        assert feedback.update(str(ObjectId()), feedback_payload(str(ObjectId()), str(ObjectId()))) is None

    def test_find_by_interview_returns_newest(self, db):
        feedback = FeedbackRepository(db)
        interview_id, user_id = str(ObjectId()), str(ObjectId())
        feedback.create(feedback_payload(interview_id, user_id, score=10, created_at="2024-01-01T00:00:00.000Z"))
        newest = feedback.create(feedback_payload(interview_id, user_id, score=20, created_at="2024-01-02T00:00:00.000Z"))

        assert str(feedback.find_by_interview(interview_id, user_id)["_id"]) == newest

    def test_find_by_interview_scoped_to_user(self, db):
        feedback = FeedbackRepository(db)
        interview_id = str(ObjectId())
        feedback.create(feedback_payload(interview_id, str(ObjectId())))

        assert feedback.find_by_interview(interview_id, str(ObjectId())) is None
