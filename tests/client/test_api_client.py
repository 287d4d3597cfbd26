"""Investments API Client: status mapping and transport failures via httpx.MockTransport."""

import json

import httpx
import pytest

from farminvest.client.api import InvestmentsApiClient
from farminvest.client.config import get_client_settings
from farminvest.client.errors import ApiError, NetworkError
from farminvest.client.types import NewInvestment

RECORD = {
    "id": 1, "farmer_name": "Jane Smith", "amount": 1500.0, "crop": "Rice",
    "created_at": "2026-10-18T08:00:00Z",
}
DRAFT = NewInvestment(farmer_name="Jane Smith", amount=1500, crop="Rice")


def _api(handler) -> InvestmentsApiClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return InvestmentsApiClient("http://farm.test/", http_client=http)


async def test_fetch_parses_records():
    seen = []

    def handler(request):
        seen.append((request.method, str(request.url)))
        return httpx.Response(200, json=[RECORD])

    records = await _api(handler).fetch_investments()
    assert seen == [("GET", "http://farm.test/api/investments")]
    assert records[0].id == 1
    assert records[0].farmer_name == "Jane Smith"


async def test_fetch_non_2xx_raises_api_error_with_status():
    api = _api(lambda request: httpx.Response(500, json={"error": "x"}))
    with pytest.raises(ApiError) as exc_info:
        await api.fetch_investments()
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == (
        "Failed to fetch investments: Internal Server Error"
    )
    assert not isinstance(exc_info.value, NetworkError)


async def test_fetch_garbage_body_raises_api_error():
    api = _api(lambda request: httpx.Response(200, content=b"<html>"))
    with pytest.raises(ApiError) as exc_info:
        await api.fetch_investments()
    assert exc_info.value.status_code == 200


async def test_transport_failure_is_network_error_with_status_zero():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as exc_info:
        await _api(handler).fetch_investments()
    assert exc_info.value.status_code == 0
    assert exc_info.value.message == "Network error: connection refused"


async def test_create_posts_draft_and_returns_record():
    sent = []

    def handler(request):
        sent.append(json.loads(request.content))
        return httpx.Response(201, json=RECORD)

    record = await _api(handler).create_investment(DRAFT)
    assert sent == [{"farmer_name": "Jane Smith", "amount": 1500.0, "crop": "Rice"}]
    assert record.id == 1


async def test_create_validation_failure_joins_details():
    body = {"error": "Validation failed", "details": ["a bad", "b bad"]}
    api = _api(lambda request: httpx.Response(400, json=body))
    with pytest.raises(ApiError) as exc_info:
        await api.create_investment(DRAFT)
    err = exc_info.value
    assert err.status_code == 400
    assert err.message == "a bad, b bad"
    assert err.details == ["a bad", "b bad"]
    assert err.is_validation_error


async def test_create_failure_falls_back_to_error_field():
    body = {"error": "Failed to create investment"}
    api = _api(lambda request: httpx.Response(500, json=body))
    with pytest.raises(ApiError) as exc_info:
        await api.create_investment(DRAFT)
    assert exc_info.value.message == "Failed to create investment"


async def test_create_failure_without_json_uses_reason_phrase():
    api = _api(lambda request: httpx.Response(502, content=b"bad gateway"))
    with pytest.raises(ApiError) as exc_info:
        await api.create_investment(DRAFT)
    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Bad Gateway"


async def test_create_transport_timeout_is_network_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NetworkError):
        await _api(handler).create_investment(DRAFT)


async def test_caller_owned_client_is_not_closed():
    http = httpx.AsyncClient(transport=httpx.MockTransport(
        lambda request: httpx.Response(200, json=[]),
    ))
    async with InvestmentsApiClient("http://farm.test", http_client=http):
        pass
    assert not http.is_closed
    await http.aclose()


def test_default_url_comes_from_client_settings(monkeypatch):
    monkeypatch.setenv("FARMINVEST_BACKEND_URL", "http://env.test:8080/")
    get_client_settings.cache_clear()
    try:
        api = InvestmentsApiClient(http_client=httpx.AsyncClient())
    finally:
        get_client_settings.cache_clear()
    assert api.investments_url == "http://env.test:8080/api/investments"
