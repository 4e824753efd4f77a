# File: employee_records/client/api.py

"""
HTTP client for the Employee Records API.

Failed responses raise httpx.HTTPStatusError (via raise_for_status) and
transport failures raise httpx.RequestError; feed either to
`parse_error`, or use `EmployeeClient.call` to get an ApiError with the
normalized failure attached.
"""

from typing import Any, Callable, Dict, Optional

import httpx

from employee_records.client.errors import ApiError, parse_error

DEFAULT_BASE_URL = "http://localhost:8000"


class BearerAuth(httpx.Auth):
    """Attach the current token, if any, to every outgoing request."""

    def __init__(self, token_getter: Callable[[], Optional[str]]):
        self._token_getter = token_getter

    def auth_flow(self, request: httpx.Request):
        token = self._token_getter()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


class EmployeeClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.token = token
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            auth=BearerAuth(lambda: self.token),
            transport=transport,
        )

    def __enter__(self) -> "EmployeeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        response = self._client.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()

    # -----------------------------
    # Auth
    # -----------------------------

    def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )

    def login(self, email: str, password: str) -> Dict[str, Any]:
        body = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.token = body["token"]
        return body

    def logout(self) -> None:
        self.token = None

    # -----------------------------
    # Employees
    # -----------------------------

    def list_employees(
        self,
        *,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        page: int = 1,
        limit: int = 5,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        if sort:
            params["sort"] = sort
        return self._request("GET", "/api/employees", params=params)

    def create_employee(self, employee: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/employees", json=employee)

    def update_employee(self, employee_id: Any, employee: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/employees/{employee_id}", json=employee)

    def delete_employee(self, employee_id: Any) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/employees/{employee_id}")

    def health(self) -> str:
        response = self._client.get("/")
        response.raise_for_status()
        return response.text

    # -----------------------------
    # Normalized calls
    # -----------------------------

    def call(self, operation: Callable[..., Any], *args, **kwargs) -> Any:
        """
        Run one of the methods above; any failure is re-raised as ApiError.

            client.call(client.create_employee, {...})
        """
        try:
            return operation(*args, **kwargs)
        except Exception as exc:
            raise ApiError(parse_error(exc)) from exc
