import asyncio
import json
import sys

from restful_booker.client import ApiResponseError, api_context
from restful_booker.config import BASE_URL, PASSWORD, USERNAME, VALIDATION_FILE, configure_logging
from restful_booker.fakes import build_booking


def _body(response):
    try:
        return response.json()
    except ApiResponseError:
        return response.text


def _listed_ids(response):
    body = _body(response) if response.status == 200 else None
    if not isinstance(body, list):
        return []
    return [entry["bookingid"] for entry in body if isinstance(entry, dict) and "bookingid" in entry]


def _write(val, output_file):
    with open(output_file, "w") as f:
        json.dump(val, f, indent=2)


async def run_flow(base_url: str = BASE_URL, transport=None, output_file: str = VALIDATION_FILE):
    val = []

    async with api_context(base_url, transport=transport) as api:
        credentials = {"username": USERNAME, "password": PASSWORD}
        r = await api.post("/auth", credentials)
        body = _body(r) if r.status == 200 else None
        token = body.get("token", "") if isinstance(body, dict) else ""
        val.append({"request": {"endpoint": "/auth", "body": {"username": USERNAME}}, "status": r.status, "response": {"token_issued": bool(token)}})

        booking = build_booking().model_dump()
        r = await api.post("/booking", booking)
        val.append({"request": {"endpoint": "/booking", "body": booking}, "status": r.status, "response": _body(r)})
        body = _body(r)
        if r.status != 200 or not isinstance(body, dict) or "bookingid" not in body:
            # nothing to look up or delete without an id
            _write(val, output_file)
            return val
        booking_id = body["bookingid"]

        r = await api.get(f"/booking/{booking_id}")
        val.append({"request": f"/booking/{booking_id}", "status": r.status, "response": _body(r)})

        r = await api.get("/booking")
        listed_before = _listed_ids(r)
        val.append({"request": "/booking", "status": r.status, "response": {"count": len(listed_before)}})

        r = await api.delete(f"/booking/{booking_id}", headers={"Cookie": f"token={token}"})
        val.append({"request": f"/booking/{booking_id}", "method": "DELETE", "status": r.status, "response": r.text})

        r = await api.get("/booking")
        listed_after = _listed_ids(r)
        val.append({"request": "/booking", "status": r.status, "response": {"count": len(listed_after), "deleted_id_still_listed": booking_id in listed_after}})

    _write(val, output_file)
    return val


if __name__ == "__main__":
    configure_logging()
    asyncio.run(run_flow(sys.argv[1] if len(sys.argv) > 1 else BASE_URL))
    print(f"Validation complete. See {VALIDATION_FILE}")
