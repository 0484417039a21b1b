import httpx
import pytest

from restful_booker.client import ApiResponse, ApiResponseError
from restful_booker.expectations import (
    expect_booking_matches,
    expect_booking_shape,
    expect_status,
    expect_token,
    parse_body,
)
from restful_booker.models import Booking, BookingDates, BookingList, BookingResponse


def make_response(status, **kwargs):
    return ApiResponse(httpx.Response(status, request=httpx.Request("GET", "http://booker.test/booking"), **kwargs))


def make_booking(**overrides):
    fields = dict(
        firstname="Jim",
        lastname="Brown",
        totalprice=111,
        depositpaid=True,
        bookingdates=BookingDates(checkin="2018-01-01", checkout="2019-01-01"),
        additionalneeds="Breakfast",
    )
    fields.update(overrides)
    return Booking(**fields)


def test_expect_status_names_expected_and_actual():
    expect_status(make_response(200, json={}), 200, "OK")

    with pytest.raises(AssertionError, match="expected HTTP 201, got 200 OK"):
        expect_status(make_response(200, json={}), 201)

    with pytest.raises(AssertionError, match="expected status text 'OK', got 'Created'"):
        expect_status(make_response(201, text="Created"), 201, "OK")


def test_parse_body_builds_models():
    body = {"bookingid": 5, "booking": make_booking().model_dump()}
    created = parse_body(make_response(200, json=body), BookingResponse)

    assert created.bookingid == 5
    assert created.booking == make_booking()


def test_parse_body_rejects_wrong_shape():
    with pytest.raises(ApiResponseError, match="not a valid Booking"):
        parse_body(make_response(200, json={"firstname": "Jim"}), Booking)

    bad_price = {**make_booking().model_dump(), "totalprice": "111"}
    with pytest.raises(ApiResponseError):
        parse_body(make_response(200, json=bad_price), Booking)


def test_parse_body_listing():
    listing = parse_body(make_response(200, json=[{"bookingid": 1}, {"bookingid": 9}]), BookingList)
    assert [entry.bookingid for entry in listing.root] == [1, 9]


def test_expect_booking_matches_names_differing_field():
    expect_booking_matches(make_booking(), make_booking())

    with pytest.raises(AssertionError, match="'lastname'"):
        expect_booking_matches(make_booking(), make_booking(lastname="Green"))

    with pytest.raises(AssertionError, match="'bookingdates.checkin': expected '2018-01-01', got '2018-01-02'"):
        expect_booking_matches(
            make_booking(),
            make_booking(bookingdates=BookingDates(checkin="2018-01-02", checkout="2019-01-01")),
        )


def test_expect_booking_shape_requires_positive_price():
    expect_booking_shape(make_booking())

    with pytest.raises(AssertionError, match="totalprice"):
        expect_booking_shape(make_booking(totalprice=0))


def test_expect_token_rejects_empty():
    expect_token("abc123")
    with pytest.raises(AssertionError, match="empty"):
        expect_token("")
