"""
HTTP client for the Mock Interviewer API.

A ``requests.Session`` keeps the ``auth_token`` cookie between calls, so a
client signed in once can call the protected endpoints. Network failures are
logged and reported in the return value rather than raised.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from mock_interviewer.utils.config import API_BASE_URL

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(self, base_url: str = API_BASE_URL, session: Optional[requests.Session] = None, timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        return self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)

    def _post(self, path: str, payload: Dict[str, Any], failure_message: str) -> Dict[str, Any]:
        try:
            response = self._request("POST", path, json=payload)
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"POST {path} failed: {e}")
            return {"success": False, "message": failure_message}

    def _get(self, path: str, key: str, **kwargs: Any) -> Any:
        try:
            response = self._request("GET", path, **kwargs)
            if not response.ok:
                return None
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"GET {path} failed: {e}")
            return None
        if not data.get("success"):
            return None
        return data.get(key)

    # ---- auth ----

    def sign_up(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._post(
            "/auth/signup",
            {"name": name, "email": email, "password": password},
            "Failed to create account. Please try again.",
        )

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        return self._post(
            "/auth/signin",
            {"email": email, "password": password},
            "Failed to log into account. Please try again.",
        )

    def sign_out(self) -> None:
        try:
            self._request("POST", "/auth/signout")
        except requests.RequestException as e:
            logger.error(f"Error signing out: {e}")

    def get_current_user(self) -> Optional[Dict[str, Any]]:
        return self._get("/auth/me", "user")

    def is_authenticated(self) -> bool:
        return self.get_current_user() is not None

    # ---- interviews ----

    def generate_interview(self, **params: Any) -> Dict[str, Any]:
        """Ask the backend to generate an interview (type, role, level, techstack, amount, userid)."""
        return self._post("/vapi/generate", params, "Failed to generate interview.")

    def get_interview(self, interview_id: str) -> Optional[Dict[str, Any]]:
        return self._get(f"/interviews/{interview_id}", "interview")

    def get_user_interviews(self) -> Optional[List[Dict[str, Any]]]:
        return self._get("/interviews/user", "interviews")

    def get_latest_interviews(self, limit: int = 20) -> Optional[List[Dict[str, Any]]]:
        return self._get("/interviews/latest", "interviews", params={"limit": limit})

    # ---- feedback ----

    def create_feedback(
        self,
        interview_id: str,
        transcript: List[Dict[str, str]],
        feedback_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"interviewId": interview_id, "transcript": transcript}
        if feedback_id:
            payload["feedbackId"] = feedback_id
        return self._post("/feedback", payload, "Failed to save feedback.")

    def get_feedback_by_interview(self, interview_id: str) -> Optional[Dict[str, Any]]:
        return self._get(f"/feedback/by-interview/{interview_id}", "feedback")
