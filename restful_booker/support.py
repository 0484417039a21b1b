"""Scenario fragments shared by several tests.

Each helper performs its own round trip(s) on the caller's ``ApiContext`` and
asserts the success contract of the endpoint it touches.
"""

import logging
from typing import List, Optional

from restful_booker.client import ApiContext, ApiResponse, ApiResponseError
from restful_booker.config import PASSWORD, USERNAME
from restful_booker.expectations import expect_booking_matches, expect_status, expect_token, parse_body
from restful_booker.fakes import BookingDataProvider, build_booking
from restful_booker.models import Booking, BookingList, BookingResponse, Token

logger = logging.getLogger(__name__)


async def get_auth_token(api: ApiContext, username: str = USERNAME, password: str = PASSWORD) -> str:
    response = await api.post("/auth", {"username": username, "password": password})
    expect_status(response, 200, "OK")
    try:
        token = parse_body(response, Token).token
    except ApiResponseError as exc:
        raise AssertionError(f"expected a Token body from /auth, got {response.text[:200]!r}") from exc
    expect_token(token)
    return token


async def create_booking(api: ApiContext, booking: Booking) -> BookingResponse:
    response = await api.post("/booking", booking.model_dump())
    expect_status(response, 200, "OK")
    created = parse_body(response, BookingResponse)
    if created.bookingid <= 0:
        raise AssertionError(f"expected a positive bookingid, got {created.bookingid}")
    expect_booking_matches(booking, created.booking)
    logger.info("created booking %s", created.bookingid)
    return created


async def create_booking_for_test(api: ApiContext, provider: Optional[BookingDataProvider] = None) -> int:
    created = await create_booking(api, build_booking(provider))
    return created.bookingid


async def get_booking(api: ApiContext, booking_id: int) -> Booking:
    response = await api.get(f"/booking/{booking_id}")
    expect_status(response, 200, "OK")
    return parse_body(response, Booking)


async def get_booking_ids(api: ApiContext) -> List[int]:
    response = await api.get("/booking")
    expect_status(response, 200, "OK")
    listing = parse_body(response, BookingList)
    return [entry.bookingid for entry in listing.root]


async def delete_booking(api: ApiContext, booking_id: int, token: str) -> ApiResponse:
    return await api.delete(f"/booking/{booking_id}", headers={"Cookie": f"token={token}"})
