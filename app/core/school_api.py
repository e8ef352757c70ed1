"""
HTTP client for the school REST backend.

Every call carries the bearer token of the current session. Failures surface as
UpstreamError with the backend's own message when it sent one.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx
from fastapi import status

from app.core.config import settings
from app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]

GENERIC_FAILURE = "Operation failed. Please try again."


def _error_message(response: httpx.Response) -> Optional[str]:
    """Backend error text: `message` first, then `error`."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _portal_status(upstream_status: int) -> int:
    # client errors pass through; anything else is a bad gateway from our side
    if 400 <= upstream_status < 500:
        return upstream_status
    return status.HTTP_502_BAD_GATEWAY


class SchoolApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._token = token
        self._token_provider = token_provider
        client_kwargs: Dict[str, Any] = {}
        if timeout is None:
            timeout = settings.school_api_timeout_seconds
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.school_api_base_url,
            transport=transport,
            **client_kwargs,
        )

    async def __aenter__(self) -> "SchoolApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        token = self._token_provider() if self._token_provider else self._token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        fallback: str = GENERIC_FAILURE,
    ) -> Any:
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(
                method, path, json=json, params=params, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s could not reach the school backend: %s", method, path, e)
            raise UpstreamError(str(e) or fallback) from e
        if response.is_error:
            message = _error_message(response) or fallback
            logger.warning("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise UpstreamError(message, _portal_status(response.status_code), response.status_code)
        if response.status_code == status.HTTP_204_NO_CONTENT or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # ----- auth -----

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
            fallback="Login failed. Please check your credentials.",
        )

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/auth/me", fallback="Could not resolve the current session")

    # ----- dashboard / tutors -----

    async def get_dashboard(self, school_id: str) -> Dict[str, Any]:
        return await self._request(
            "GET", f"/schools/{school_id}/dashboard", fallback="Failed to load school data"
        )

    async def list_tutors(self, school_id: str, simple: bool = False) -> List[Dict[str, Any]]:
        params = {"simple": "true"} if simple else None
        return await self._request("GET", f"/schools/{school_id}/tutors", params=params) or []

    async def create_tutor(self, school_id: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return await self._request("POST", f"/schools/{school_id}/tutors", json=payload)

    async def update_tutor(self, school_id: str, tutor_id: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return await self._request("PUT", f"/schools/{school_id}/tutors/{tutor_id}", json=payload)

    async def delete_tutor(self, school_id: str, tutor_id: str) -> None:
        await self._request("DELETE", f"/schools/{school_id}/tutors/{tutor_id}", fallback="Delete failed")

    # ----- grades / sections / subjects -----

    async def create_grade(self, school_id: str, grade_name: str, sections: List[Dict[str, Any]]) -> Any:
        return await self._request(
            "POST",
            f"/schools/{school_id}/grades",
            json={"gradeName": grade_name, "sections": sections},
        )

    async def rename_grade(self, school_id: str, grade_id: str, name: str) -> Any:
        return await self._request("PUT", f"/schools/{school_id}/grades/{grade_id}", json={"name": name})

    async def delete_grade(self, school_id: str, grade_id: str) -> None:
        await self._request("DELETE", f"/schools/{school_id}/grades/{grade_id}", fallback="Delete failed")

    async def create_section(self, school_id: str, grade_id: str, name: str, subjects: List[str]) -> Any:
        return await self._request(
            "POST",
            f"/schools/{school_id}/grades/{grade_id}/sections",
            json={"name": name, "subjects": subjects},
            fallback="Failed to create section",
        )

    async def delete_section(self, school_id: str, section_id: str) -> None:
        await self._request(
            "DELETE",
            f"/schools/{school_id}/grades/sections/{section_id}",
            fallback="Failed to delete section",
        )

    async def replace_section_subjects(self, school_id: str, section_id: str, subjects: List[str]) -> Any:
        return await self._request(
            "PUT",
            f"/schools/{school_id}/grades/sections/{section_id}/subjects",
            json={"subjects": subjects},
            fallback="Failed to update section subjects",
        )

    async def add_section_subject(self, school_id: str, section_id: str, name: str) -> Any:
        return await self._request(
            "POST",
            f"/schools/{school_id}/grades/sections/{section_id}/subjects",
            json={"name": name},
        )

    async def delete_section_subject(self, school_id: str, subject_id: str) -> None:
        await self._request(
            "DELETE",
            f"/schools/{school_id}/grades/section-subjects/{subject_id}",
            fallback="Delete failed",
        )

    # ----- assignments -----

    async def list_assignments(self, school_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/schools/{school_id}/assignments") or []

    async def create_assignment(self, school_id: str, payload: Dict[str, Any]) -> Any:
        return await self._request(
            "POST",
            f"/schools/{school_id}/assignments",
            json=payload,
            fallback="Assignment failed. Please try again.",
        )

    async def replace_assignment(self, school_id: str, payload: Dict[str, Any]) -> Any:
        """Full replace of the tutor's assignment record (tutor identified in the body)."""
        return await self._request(
            "PUT",
            f"/schools/{school_id}/assignments",
            json=payload,
            fallback="Assignment failed. Please try again.",
        )

    async def delete_assignment(self, school_id: str, assignment_id: str) -> None:
        await self._request(
            "DELETE", f"/schools/{school_id}/assignments/{assignment_id}", fallback="Delete failed"
        )

    async def delete_tutor_assignments(self, school_id: str, tutor_id: str) -> None:
        await self._request(
            "DELETE", f"/schools/{school_id}/assignments/tutor/{tutor_id}", fallback="Delete failed"
        )
