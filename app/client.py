"""
HTTP client for the Job Board API.

The caller's session (bearer token plus the cached profile) is an explicit
SessionContext object with a load/clear lifecycle. The client reads the token
from the context it was given on every request; nothing is kept in module
globals.

Usage:
    session = SessionContext()
    with JobBoardClient("http://localhost:8000/api", session) as client:
        client.login("candidate@example.com", "password123")
        jobs = client.list_jobs(search="python", job_type="FULL_TIME")
"""

import logging
from typing import Any, Dict, List, Optional
import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, detail: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.status_code = status_code
        self.detail = detail
        self.errors = errors or []
        super().__init__(f"{status_code}: {detail}")


class SessionContext:
    """Token and profile of the signed-in user."""

    def __init__(self):
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def load(self, token: str, user: Optional[Dict[str, Any]] = None) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


class JobBoardClient:
    """
    One method per API route. Raises ApiError on any non-2xx response.

    `http_client` may be any httpx.Client (including FastAPI's TestClient);
    when omitted, one is created for `base_url` and closed by close().
    """

    def __init__(
        self,
        base_url: str = "",
        session: Optional[SessionContext] = None,
        http_client: Optional[httpx.Client] = None,
        api_prefix: str = "",
        timeout: float = 10.0
    ):
        self.session = session or SessionContext()
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self._prefix = api_prefix.rstrip("/")

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "JobBoardClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = {**self.session.auth_headers(), **kwargs.pop("headers", {})}
        response = self._http.request(method, f"{self._prefix}{path}", headers=headers, **kwargs)

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            detail = body.get("detail", response.reason_phrase) if isinstance(body, dict) else response.reason_phrase
            errors = body.get("errors") if isinstance(body, dict) else None
            logger.debug(f"{method} {path} failed with {response.status_code}: {detail}")
            raise ApiError(response.status_code, str(detail), errors)

        return response.json()

    # Auth

    def register(self, **fields) -> Dict[str, Any]:
        """Register and load the returned token into the session."""
        data = self._request("POST", "/auth/register", json=fields)
        self.session.load(data["token"], data["user"])
        return data

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and load the returned token into the session."""
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.session.load(data["token"], data["user"])
        return data

    def logout(self) -> None:
        self.session.clear()

    def get_me(self) -> Dict[str, Any]:
        user = self._request("GET", "/auth/me")
        self.session.user = user
        return user

    # Jobs

    def list_jobs(self, page: int = 1, limit: int = 10, **filters) -> Dict[str, Any]:
        """
        filters: search, job_type, location, industry, experience_level, featured
        """
        aliases = {"job_type": "jobType", "experience_level": "experienceLevel"}
        params: Dict[str, Any] = {"page": page, "limit": limit}
        for name, value in filters.items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            params[aliases.get(name, name)] = value
        return self._request("GET", "/jobs", params=params)

    def get_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/jobs/{job_id}")

    def create_job(self, **fields) -> Dict[str, Any]:
        return self._request("POST", "/jobs", json=fields)

    def update_job(self, job_id: str, **fields) -> Dict[str, Any]:
        return self._request("PUT", f"/jobs/{job_id}", json=fields)

    def delete_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/jobs/{job_id}")

    def get_employer_jobs(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/jobs/employer/my-jobs")

    # Applications

    def apply_for_job(self, job_id: str, resume_url: str, cover_letter: Optional[str] = None) -> Dict[str, Any]:
        payload = {"jobId": job_id, "resumeUrl": resume_url}
        if cover_letter is not None:
            payload["coverLetter"] = cover_letter
        return self._request("POST", "/applications", json=payload)

    def get_candidate_applications(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/applications/candidate/my-applications")

    def get_job_applications(self, job_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/applications/job/{job_id}")

    def update_application_status(self, application_id: str, status: str) -> Dict[str, Any]:
        return self._request("PUT", f"/applications/{application_id}/status", json={"status": status})

    def withdraw_application(self, application_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/applications/{application_id}")

    # Users

    def update_profile(self, **fields) -> Dict[str, Any]:
        user = self._request("PUT", "/users/profile", json=fields)
        self.session.user = user
        return user

    def get_user(self, user_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/users/{user_id}")
