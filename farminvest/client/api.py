"""Investments API Client: async httpx wrapper with error mapping.

Invariants:
    - Non-2xx responses: ApiError carrying the HTTP status
    - Transport failures (connect, DNS, protocol, transport timeout): NetworkError, status 0
    - Undecodable bodies on a 2xx response: ApiError with that status
    - No timeout of its own beyond the httpx default

Design Decisions:
    - Wrapper over raw httpx: the controller only ever sees ApiError
    - Caller-provided AsyncClient is not closed by aclose(); one we built is
"""

import logging

import httpx
from pydantic import ValidationError

from farminvest.client.config import ClientSettings, get_client_settings
from farminvest.client.errors import ApiError, NetworkError
from farminvest.client.types import Investment, NewInvestment

logger = logging.getLogger(__name__)


class InvestmentsApiClient:
    """Talks to /api/investments."""

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        settings = (
            ClientSettings(backend_url=base_url) if base_url
            else get_client_settings()
        )
        self.investments_url = settings.investments_url
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient()

    async def fetch_investments(self) -> list[Investment]:
        """Fetch all investments, newest first."""
        response = await self._send("GET", self.investments_url)
        if response.is_error:
            raise ApiError(
                response.status_code,
                f"Failed to fetch investments: {response.reason_phrase}",
            )
        payload = self._decode(response)
        try:
            return [Investment.model_validate(item) for item in payload]
        except (TypeError, ValidationError) as e:
            raise ApiError(
                response.status_code, f"Unexpected response body: {e}",
            ) from e

    async def create_investment(self, draft: NewInvestment) -> Investment:
        """Create an investment and return the server's stored record."""
        response = await self._send(
            "POST", self.investments_url, json=draft.model_dump(),
        )
        if response.is_error:
            raise self._create_error(response)
        try:
            return Investment.model_validate(self._decode(response))
        except ValidationError as e:
            raise ApiError(
                response.status_code, f"Unexpected response body: {e}",
            ) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "InvestmentsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"Network error on {method} {url}: {e!r}")
            raise NetworkError(
                f"Network error: {str(e) or type(e).__name__}",
            ) from e

    @staticmethod
    def _decode(response: httpx.Response):
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                response.status_code, "Invalid JSON in response body",
            ) from e

    @staticmethod
    def _create_error(response: httpx.Response) -> ApiError:
        """Prefer the joined validation details, then the error field."""
        try:
            body = response.json()
        except ValueError:
            body = {"error": response.reason_phrase}
        if not isinstance(body, dict):
            body = {}
        details = [str(d) for d in body.get("details") or []]
        if details:
            message = ", ".join(details)
        else:
            message = body.get("error") or "Failed to create investment"
        logger.info(
            f"Create rejected: {message}",
            extra={"status_code": response.status_code},
        )
        return ApiError(response.status_code, message, details)
