import httpx
import pytest
import pytest_asyncio

from restful_booker import mock_service
from restful_booker.client import ApiContext
from restful_booker.config import BASE_URL

MOCK_BASE_URL = "http://mock-booker"


def pytest_addoption(parser):
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="run the booking scenarios against RESTFUL_BOOKER_BASE_URL instead of the in-process mock",
    )


@pytest.fixture
def live(request) -> bool:
    return request.config.getoption("--live")


@pytest.fixture(autouse=True)
def fresh_mock_store():
    mock_service.reset_store()
    yield
    mock_service.reset_store()


@pytest_asyncio.fixture
async def api(live):
    """One client context per scenario, disposed whatever the outcome."""
    if live:
        ctx = ApiContext(BASE_URL)
    else:
        ctx = ApiContext(MOCK_BASE_URL, transport=httpx.ASGITransport(app=mock_service.app))
    try:
        yield ctx
    finally:
        await ctx.dispose()
