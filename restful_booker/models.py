from typing import List

from pydantic import BaseModel, RootModel, StrictBool, StrictInt, StrictStr


class Token(BaseModel):
    token: StrictStr


class BookingDates(BaseModel):
    checkin: StrictStr
    checkout: StrictStr


class Booking(BaseModel):
    firstname: StrictStr
    lastname: StrictStr
    totalprice: StrictInt
    depositpaid: StrictBool
    bookingdates: BookingDates
    additionalneeds: StrictStr


class BookingResponse(BaseModel):
    """Body returned by POST /booking; the id is assigned by the service."""
    bookingid: StrictInt
    booking: Booking


class BookingSummary(BaseModel):
    """One entry of GET /booking."""
    bookingid: StrictInt


class BookingList(RootModel[List[BookingSummary]]):
    pass
