"""In-memory stand-in for the restful-booker service.

Serves the same contract as the real API (auth, booking create / list / get /
delete) so the scenarios can run without the external service. It also
reproduces the service's known defect: DELETE answers 201 but leaves the
booking in place, unless ``honor_deletes`` is switched on.

Run it on the suite's default port with::

    python -m restful_booker.mock_service
"""

import json
import logging
import os
import secrets
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Body, Cookie, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from restful_booker import config
from restful_booker.models import Booking, BookingDates

logger = logging.getLogger(__name__)

app = FastAPI(title="Mock restful-booker API")

_store_lock = threading.Lock()
_log_lock = threading.Lock()

bookings: Dict[int, Dict[str, Any]] = {}
tokens: set = set()
_next_id = 1

# The real service acknowledges deletes without removing anything.
honor_deletes = False

SEED_BOOKINGS = [
    Booking(
        firstname="Sally",
        lastname="Brown",
        totalprice=111,
        depositpaid=True,
        bookingdates=BookingDates(checkin="2013-02-23", checkout="2014-10-23"),
        additionalneeds="Breakfast",
    ),
    Booking(
        firstname="Mark",
        lastname="Wilson",
        totalprice=520,
        depositpaid=False,
        bookingdates=BookingDates(checkin="2016-07-12", checkout="2016-07-19"),
        additionalneeds="Late checkout",
    ),
]


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def append_json_file(path: str, entry: Dict[str, Any]) -> None:
    """
    Append an object to a JSON array file. Thread-safe within process via _log_lock.
    If file doesn't exist or is invalid, create/reset it.
    """
    with _log_lock:
        if not os.path.exists(path):
            with open(path, "w", encoding="utf-8") as f:
                json.dump([entry], f, ensure_ascii=False, indent=2)
            return

        with open(path, "r+", encoding="utf-8") as f:
            try:
                data = json.load(f)
                if not isinstance(data, list):
                    data = [data]
            except json.JSONDecodeError:
                data = []
            data.append(entry)
            f.seek(0)
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.truncate()


def append_validation(endpoint: str, request: Dict[str, Any], response: Any, status_code: int) -> None:
    """
    Audit entry for one call, appended to AUDIT_LOG_FILE when configured.
    """
    if not config.AUDIT_LOG_FILE:
        return
    entry = {
        "timestamp": now_iso(),
        "endpoint": endpoint,
        "status_code": status_code,
        "outcome": "success" if status_code < 400 else "failure",
        "request": request,
        "response": response,
    }
    append_json_file(config.AUDIT_LOG_FILE, entry)


def reset_store(seed: Optional[List[Booking]] = None) -> None:
    global _next_id
    seed = SEED_BOOKINGS if seed is None else seed
    with _store_lock:
        bookings.clear()
        tokens.clear()
        _next_id = 1
        for booking in seed:
            bookings[_next_id] = booking.model_dump()
            _next_id += 1


def not_found(booking_id: int) -> HTTPException:
    append_validation(f"/booking/{booking_id}", {}, {"error": "Not Found"}, 404)
    return HTTPException(status_code=404, detail="Not Found")


@app.exception_handler(HTTPException)
async def plain_text_errors(request, exc: HTTPException):
    # restful-booker answers errors with a bare reason phrase, not JSON
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


@app.post("/auth")
def create_token(credentials: Dict[str, Any] = Body(...)):
    username = credentials.get("username")
    password = credentials.get("password")
    if username != config.USERNAME or password != config.PASSWORD:
        response = {"reason": "Bad credentials"}
        append_validation("/auth", {"username": username}, response, 200)
        return response
    token = secrets.token_hex(8)[:15]
    with _store_lock:
        tokens.add(token)
    append_validation("/auth", {"username": username}, {"token": "<redacted>"}, 200)
    return {"token": token}


@app.get("/booking", response_model=List[dict])
def list_booking_ids():
    with _store_lock:
        listing = [{"bookingid": bid} for bid in bookings]
    append_validation("/booking", {"action": "list"}, {"count": len(listing)}, 200)
    return listing


@app.get("/booking/{booking_id}")
def get_booking(booking_id: int):
    with _store_lock:
        b = bookings.get(booking_id)
    if b is None:
        raise not_found(booking_id)
    append_validation(f"/booking/{booking_id}", {}, b, 200)
    return b


@app.post("/booking")
def create_booking(booking: Booking):
    global _next_id
    payload = booking.model_dump()
    with _store_lock:
        bid = _next_id
        _next_id += 1
        bookings[bid] = payload
    response = {"bookingid": bid, "booking": payload}
    append_validation("/booking", payload, response, 200)
    logger.debug("mock created booking %s", bid)
    return response


@app.delete("/booking/{booking_id}")
def delete_booking(booking_id: int, token: Optional[str] = Cookie(None)):
    with _store_lock:
        authorized = token is not None and token in tokens
        found = booking_id in bookings
        if authorized and found and honor_deletes:
            bookings.pop(booking_id)
    if not authorized:
        append_validation(f"/booking/{booking_id}", {"token": bool(token)}, {"error": "Forbidden"}, 403)
        raise HTTPException(status_code=403, detail="Forbidden")
    if not found:
        raise not_found(booking_id)
    append_validation(f"/booking/{booking_id}", {}, {"status": "Created"}, 201)
    return PlainTextResponse("Created", status_code=201)


reset_store()


if __name__ == "__main__":
    import uvicorn
    from urllib.parse import urlparse

    config.configure_logging()
    target = urlparse(config.BASE_URL)
    uvicorn.run(app, host=target.hostname or "127.0.0.1", port=target.port or 3001)
