"""HTTP client for the marketplace API.

Holds the session token, attaches it to every request and turns responses
and transport failures into a uniform ``ApiResponse``.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT = 30.0


@dataclass
class ApiResponse:
    """Normalized result of an API call."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)
    status_code: Optional[int] = None


def _params(**kwargs: Any) -> Dict[str, Any]:
    """Drop unset query parameters."""
    return {key: value for key, value in kwargs.items() if value not in (None, "")}


class MarketplaceClient:
    """Client for the marketplace REST API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        token_path: Optional[Union[str, Path]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            base_url: API root, e.g. ``http://localhost:5000/api``.
            token: Initial session token.
            http: Preconfigured httpx client; one is created if omitted.
            token_path: File the token is persisted to between runs.
            timeout: Request timeout in seconds for a created client.
        """
        self.base_url = base_url.rstrip("/")
        self._http = http or httpx.Client(timeout=timeout)
        self._token_path = Path(token_path) if token_path else None
        self._token = token
        if self._token is None and self._token_path and self._token_path.exists():
            self._token = self._token_path.read_text().strip() or None

    # --- Token handling ---

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token
        if self._token_path:
            self._token_path.parent.mkdir(parents=True, exist_ok=True)
            self._token_path.write_text(token)

    def clear_token(self) -> None:
        self._token = None
        if self._token_path:
            self._token_path.unlink(missing_ok=True)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "MarketplaceClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Transport ---

    def request(
        self,
        method: str,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        """Send a request and normalize the outcome.

        Args:
            method: HTTP method.
            endpoint: Path relative to the base URL, starting with ``/``.
            json: JSON body.
            params: Query parameters.
            files: Multipart files.

        Returns:
            ApiResponse; ``data`` holds the decoded body on success.
        """
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            response = self._http.request(
                method,
                f"{self.base_url}{endpoint}",
                json=json,
                params=params,
                files=files,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error("API request failed: %s %s: %s", method, endpoint, e)
            return ApiResponse(success=False, error=str(e) or "Network error")

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.is_success:
            if not isinstance(body, dict):
                body = {}
            return ApiResponse(
                success=False,
                error=body.get("error") or body.get("message") or "Request failed",
                errors=body.get("errors") or [],
                status_code=response.status_code,
            )

        return ApiResponse(success=True, data=body, status_code=response.status_code)

    # --- Auth endpoints ---

    def register_buyer(self, name: str, email: str, password: str) -> ApiResponse:
        return self.request(
            "POST",
            "/auth/register/buyer",
            json={"name": name, "email": email, "password": password},
        )

    def register_designer(
        self,
        name: str,
        email: str,
        password: str,
        bio: Optional[str] = None,
        portfolio_link: Optional[str] = None,
    ) -> ApiResponse:
        body = {"name": name, "email": email, "password": password}
        body.update(_params(bio=bio, portfolioLink=portfolio_link))
        return self.request("POST", "/auth/register/designer", json=body)

    def login(self, email: str, password: str) -> ApiResponse:
        """Log in and keep the returned token for later calls."""
        response = self.request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        if response.success and response.data and response.data.get("token"):
            self.set_token(response.data["token"])
        return response

    def logout(self) -> None:
        self.clear_token()

    def me(self) -> ApiResponse:
        return self.request("GET", "/auth/me")

    # --- Design endpoints ---

    def get_designs(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> ApiResponse:
        return self.request(
            "GET",
            "/designs",
            params=_params(
                page=page, limit=limit, category=category, search=search, sortBy=sort_by
            ),
        )

    def get_design(self, design_id: int) -> ApiResponse:
        return self.request("GET", f"/designs/{design_id}")

    def create_design(
        self,
        title: str,
        category: str,
        price: float,
        file_url: str,
        watermarked_preview_url: str,
        description: Optional[str] = None,
    ) -> ApiResponse:
        body = {
            "title": title,
            "category": category,
            "price": price,
            "fileUrl": file_url,
            "watermarkedPreviewUrl": watermarked_preview_url,
        }
        body.update(_params(description=description))
        return self.request("POST", "/designs", json=body)

    def update_design(
        self,
        design_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[float] = None,
    ) -> ApiResponse:
        body = _params(title=title, description=description, price=price)
        return self.request("PUT", f"/designs/{design_id}", json=body)

    def delete_design(self, design_id: int) -> ApiResponse:
        return self.request("DELETE", f"/designs/{design_id}")

    def upload_file(self, filename: str, content: bytes) -> ApiResponse:
        return self.request("POST", "/uploads", files={"file": (filename, content)})

    # --- User endpoints ---

    def get_user(self, user_id: int) -> ApiResponse:
        return self.request("GET", f"/users/{user_id}")

    def get_designer(self, designer_id: int) -> ApiResponse:
        return self.request("GET", f"/users/designers/{designer_id}")

    # --- Admin endpoints ---

    def get_dashboard_stats(self) -> ApiResponse:
        return self.request("GET", "/admin/stats")

    def get_all_users(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        role: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> ApiResponse:
        return self.request(
            "GET",
            "/admin/users",
            params=_params(page=page, limit=limit, role=role, status=status, search=search),
        )

    def get_user_admin(self, user_id: int) -> ApiResponse:
        return self.request("GET", f"/admin/users/{user_id}")

    def update_user_status(
        self, user_id: int, status: str, reason: Optional[str] = None
    ) -> ApiResponse:
        return self.request(
            "PUT",
            f"/admin/users/{user_id}/status",
            json={"status": status, "reason": reason},
        )

    def delete_user(self, user_id: int) -> ApiResponse:
        return self.request("DELETE", f"/admin/users/{user_id}")

    def get_all_designs_admin(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        designer_id: Optional[int] = None,
    ) -> ApiResponse:
        return self.request(
            "GET",
            "/admin/designs",
            params=_params(
                page=page,
                limit=limit,
                status=status,
                category=category,
                designerId=designer_id,
            ),
        )

    def get_design_admin(self, design_id: int) -> ApiResponse:
        return self.request("GET", f"/admin/designs/{design_id}")

    def moderate_design(
        self, design_id: int, status: str, reason: Optional[str] = None
    ) -> ApiResponse:
        return self.request(
            "PUT",
            f"/admin/designs/{design_id}/moderate",
            json={"status": status, "reason": reason},
        )

    def delete_design_admin(self, design_id: int) -> ApiResponse:
        return self.request("DELETE", f"/admin/designs/{design_id}")

    def get_all_transactions(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
    ) -> ApiResponse:
        return self.request(
            "GET",
            "/admin/transactions",
            params=_params(page=page, limit=limit, status=status),
        )

    def get_transaction(self, transaction_id: int) -> ApiResponse:
        return self.request("GET", f"/admin/transactions/{transaction_id}")

    def refund_transaction(
        self, transaction_id: int, reason: Optional[str] = None
    ) -> ApiResponse:
        return self.request(
            "PUT",
            f"/admin/transactions/{transaction_id}/refund",
            json={"reason": reason},
        )

    def get_all_withdrawals(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
    ) -> ApiResponse:
        return self.request(
            "GET",
            "/admin/withdrawals",
            params=_params(page=page, limit=limit, status=status),
        )

    def process_withdrawal(
        self, withdrawal_id: int, status: str, reason: Optional[str] = None
    ) -> ApiResponse:
        return self.request(
            "PUT",
            f"/admin/withdrawals/{withdrawal_id}/process",
            json={"status": status, "reason": reason},
        )

    def get_reports(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        report_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> ApiResponse:
        return self.request(
            "GET",
            "/admin/reports",
            params=_params(page=page, limit=limit, type=report_type, status=status),
        )
