from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from restful_booker.client import ApiResponse, ApiResponseError
from restful_booker.models import Booking

M = TypeVar("M", bound=BaseModel)


def expect_status(response: ApiResponse, status: int, status_text: Optional[str] = None) -> None:
    if response.status != status:
        raise AssertionError(
            f"expected HTTP {status}, got {response.status} {response.status_text}: {response.text[:200]!r}"
        )
    if status_text is not None and response.status_text != status_text:
        raise AssertionError(f"expected status text {status_text!r}, got {response.status_text!r}")


def parse_body(response: ApiResponse, model: Type[M]) -> M:
    payload = response.json()
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ApiResponseError(f"response body is not a valid {model.__name__}: {exc}") from exc


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{prefix}{key}."))
        else:
            flat[f"{prefix}{key}"] = value
    return flat


def expect_booking_matches(expected: Booking, actual: Booking) -> None:
    """
    Field-by-field equality. Fails on the first differing field, named by its
    dotted path (e.g. ``bookingdates.checkin``).
    """
    want = _flatten(expected.model_dump())
    got = _flatten(actual.model_dump())
    for field, value in want.items():
        if field not in got:
            raise AssertionError(f"booking field {field!r} missing from response")
        if got[field] != value:
            raise AssertionError(f"booking field {field!r}: expected {value!r}, got {got[field]!r}")


def expect_booking_shape(booking: Booking) -> None:
    for field in ("firstname", "lastname", "additionalneeds"):
        if not isinstance(getattr(booking, field), str):
            raise AssertionError(f"{field} is not a string")
    for field in ("checkin", "checkout"):
        if not isinstance(getattr(booking.bookingdates, field), str):
            raise AssertionError(f"bookingdates.{field} is not a string")
    price = booking.totalprice
    if isinstance(price, bool) or not isinstance(price, int) or price <= 0:
        raise AssertionError(f"totalprice should be a positive integer, got {price!r}")


def expect_token(token: str) -> None:
    if not token:
        raise AssertionError("auth token is empty")
