"""
MongoDB repositories for users, interviews and feedback.

Each repository owns one collection of the application database and creates
its indexes when constructed. All writes are single-document operations.
"""
import logging
from typing import Any, Dict, List, Optional

import pymongo
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from mock_interviewer.utils.errors import Conflict

logger = logging.getLogger(__name__)


class UserRepository:
    """Credential store: user records keyed by unique, lower-cased email."""

    collection_name = "users"

    def __init__(self, db: Database):
        self.collection = db[self.collection_name]
        try:
            self.collection.create_index([("email", pymongo.ASCENDING)], unique=True)
        except Exception as e:
            logger.warning(f"Index creation warning (may already exist): {e}")

    def create(self, name: str, email: str, password_hash: str) -> Dict[str, Any]:
        """
        Insert a new user.

        Raises:
            Conflict: if the email is already registered
        """
        document = {
            "name": name,
            "email": email.strip().lower(),
            "password_hash": password_hash,
        }
        try:
            result = self.collection.insert_one(document)
        except DuplicateKeyError:
            raise Conflict("User already exists")
        document["_id"] = result.inserted_id
        logger.info(f"Created user {result.inserted_id}")
        return document

    def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"email": email.strip().lower()})

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"_id": ObjectId(user_id)})


class InterviewRepository:
    """Interview records; created once and never updated."""

    collection_name = "interviews"

    def __init__(self, db: Database):
        self.collection = db[self.collection_name]
        try:
            self.collection.create_index([("user_id", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)])
            self.collection.create_index([("finalized", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)])
        except Exception as e:
            logger.warning(f"Index creation warning (may already exist): {e}")

    def create(self, document: Dict[str, Any]) -> str:
        document = dict(document)
        document["user_id"] = ObjectId(document["user_id"])
        result = self.collection.insert_one(document)
        logger.info(f"Created interview {result.inserted_id} for user {document['user_id']}")
        return str(result.inserted_id)

    def get(self, interview_id: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"_id": ObjectId(interview_id)})

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        return list(self.collection.find(
            {"user_id": ObjectId(user_id)},
            sort=[("created_at", pymongo.DESCENDING)],
        ))

    def list_latest(self, exclude_user_id: str, limit: int) -> List[Dict[str, Any]]:
        """Finalized interviews owned by anyone but ``exclude_user_id``, newest first."""
        return list(self.collection.find(
            {"finalized": True, "user_id": {"$ne": ObjectId(exclude_user_id)}},
            sort=[("created_at", pymongo.DESCENDING)],
            limit=limit,
        ))


class FeedbackRepository:
    """
    Feedback records.

    Nothing at the storage level prevents two records for the same
    (interview, user) pair; ``find_by_interview`` treats the newest as canonical.
    """

    collection_name = "feedback"

    def __init__(self, db: Database):
        self.collection = db[self.collection_name]
        try:
            self.collection.create_index([("interview_id", pymongo.ASCENDING), ("user_id", pymongo.ASCENDING)])
            self.collection.create_index([("user_id", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)])
        except Exception as e:
            logger.warning(f"Index creation warning (may already exist): {e}")

    @staticmethod
    def _to_document(payload: Dict[str, Any]) -> Dict[str, Any]:
        document = dict(payload)
        document["interview_id"] = ObjectId(document["interview_id"])
        document["user_id"] = ObjectId(document["user_id"])
        return document

    def create(self, payload: Dict[str, Any]) -> str:
        result = self.collection.insert_one(self._to_document(payload))
        logger.info(f"Created feedback {result.inserted_id} for interview {payload['interview_id']}")
        return str(result.inserted_id)

    def update(self, feedback_id: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Overwrite a feedback record owned by the same user for the same interview.

        Returns:
            The updated document, or None when no such record exists
        """
        document = self._to_document(payload)
        updated = self.collection.find_one_and_update(
            {
                "_id": ObjectId(feedback_id),
                "user_id": document["user_id"],
                "interview_id": document["interview_id"],
            },
            {"$set": document},
            return_document=ReturnDocument.AFTER,
        )
        if updated is not None:
            logger.info(f"Updated feedback {feedback_id}")
        return updated

    def find_by_interview(self, interview_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one(
            {"interview_id": ObjectId(interview_id), "user_id": ObjectId(user_id)},
            sort=[("created_at", pymongo.DESCENDING)],
        )

    def list_by_interview(self, interview_id: str, user_id: str) -> List[Dict[str, Any]]:
        return list(self.collection.find(
            {"interview_id": ObjectId(interview_id), "user_id": ObjectId(user_id)},
            sort=[("created_at", pymongo.DESCENDING)],
        ))
