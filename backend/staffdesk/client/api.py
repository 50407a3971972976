from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from staffdesk.core.errors import AuthError, InternalError, ValidationError, error_from_body
from staffdesk.core.logging import get_logger

from .session import ClientSession
from .validators import (
    describe_errors,
    validate_employee_form,
    validate_login_form,
    validate_position_form,
)

logger = get_logger(__name__)

EMPLOYEE_FIELDS = (
    "employee_id",
    "first_name",
    "last_name",
    "middle_name",
    "position_id",
    "address",
    "contact_email",
    "contact_phone",
    "salary",
)


class StaffDeskClient:
    """HTTP client for the StaffDesk API.

    Mutating calls validate their input first and carry the stored bearer
    token. A 401/403 answer ends the local session before ``AuthError`` is
    raised, so callers only need to send the user back to login.
    """

    def __init__(self, http: httpx.Client, session: ClientSession) -> None:
        self.http = http
        self.session = session

    @classmethod
    def connect(cls, base_url: str, session: ClientSession, timeout: float = 10.0) -> "StaffDeskClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout), session)

    def close(self) -> None:
        self.http.close()

    def _headers(self, auth: bool) -> dict[str, str]:
        if not auth:
            return {}
        if not self.session.is_logged_in():
            raise AuthError("Not logged in")
        return {"Authorization": f"Bearer {self.session.token}"}

    def _request(self, method: str, path: str, auth: bool = False, json: Any = None) -> Any:
        try:
            response = self.http.request(method, path, json=json, headers=self._headers(auth))
        except httpx.HTTPError as exc:
            logger.error("api_unreachable", method=method, path=path, error=str(exc))
            raise InternalError("Service unavailable") from exc

        if response.is_success:
            return response.json() if response.content else None

        try:
            body = response.json()
        except ValueError:
            body = None
        error = error_from_body(response.status_code, body)
        logger.info("api_error", method=method, path=path, status=response.status_code, code=error.code)
        if isinstance(error, AuthError) and auth:
            self.session.logout()
        raise error

    @staticmethod
    def _check(errors: dict[str, list[str]]) -> None:
        if errors:
            raise ValidationError(describe_errors(errors))

    def login(self, username: str, password: str) -> dict[str, Any]:
        self._check(validate_login_form(username, password))
        result = self._request("POST", "/api/auth/login", json={"username": username.strip(), "password": password})
        self.session.start(result["token"], result["user"])
        return result["user"]

    def logout(self) -> None:
        self.session.logout()

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/api/health")

    def list_employees(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/employees")

    def get_employee(self, record_id: int) -> dict[str, Any]:
        return self._request("GET", f"/api/employees/{record_id}")

    def create_employee(self, data: Mapping[str, Any]) -> dict[str, Any]:
        self._check(validate_employee_form(data))
        payload = {key: data.get(key) for key in EMPLOYEE_FIELDS}
        return self._request("POST", "/api/employees", auth=True, json=payload)

    def update_employee(self, record_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        self._check(validate_employee_form(data))
        payload = {key: data.get(key) for key in EMPLOYEE_FIELDS}
        return self._request("PUT", f"/api/employees/{record_id}", auth=True, json=payload)

    def delete_employee(self, record_id: int) -> None:
        self._request("DELETE", f"/api/employees/{record_id}", auth=True)

    def list_positions(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/positions")

    def create_position(self, name: str) -> dict[str, Any]:
        self._check(validate_position_form(name))
        return self._request("POST", "/api/positions", auth=True, json={"name": name.strip()})

    def delete_position(self, position_id: int) -> None:
        self._request("DELETE", f"/api/positions/{position_id}", auth=True)

    def list_admin_users(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/admin/users", auth=True)

    def create_admin_user(self, username: str, password: str) -> dict[str, Any]:
        self._check(validate_login_form(username, password))
        return self._request(
            "POST", "/api/admin/users", auth=True, json={"username": username.strip(), "password": password}
        )

    def delete_admin_user(self, user_id: int) -> None:
        self._request("DELETE", f"/api/admin/users/{user_id}", auth=True)

    def whoami(self) -> Optional[dict[str, Any]]:
        try:
            return self._request("GET", "/api/auth/me", auth=True)
        except AuthError:
            return None
