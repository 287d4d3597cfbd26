"""Client against the real app: controller + API client over ASGITransport."""

import pytest

from farminvest.client.api import InvestmentsApiClient
from farminvest.client.controller import InvestmentListController
from farminvest.client.errors import ApiError
from farminvest.client.types import Confirmed


@pytest.fixture
async def controller(client):
    api = InvestmentsApiClient("http://test", http_client=client)
    return InvestmentListController(api)


async def test_create_then_load_round_trip(controller):
    await controller.load()
    assert controller.is_empty

    created = await controller.create("  Jane Smith ", 1500, "Rice")
    assert created.farmer_name == "Jane Smith"
    assert controller.items == [Confirmed(created)]

    await controller.refresh()
    assert [e.id for e in controller.items] == [created.id]


async def test_server_validation_failure_rolls_back(controller):
    await controller.load()
    with pytest.raises(ApiError) as exc_info:
        await controller.create("", -5, "")
    assert exc_info.value.status_code == 400
    assert len(exc_info.value.details) == 3
    assert controller.items == []


async def test_storage_failure_surfaces_as_last_error(controller, drop_investments):
    await drop_investments()
    await controller.load()
    assert controller.show_error_state
    assert controller.last_error.status_code == 500
