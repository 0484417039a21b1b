"""Randomised booking payloads.

Scenarios depend only on ``BookingDataProvider``; ``FakerBookingData`` is the
default implementation backed by Faker.
"""

from datetime import date, timedelta
from typing import Optional, Protocol

from faker import Faker

from restful_booker.models import Booking, BookingDates

MAX_PRICE = 10_000


class BookingDataProvider(Protocol):
    def next_first_name(self) -> str: ...

    def next_last_name(self) -> str: ...

    def next_price(self) -> int: ...

    def next_boolean(self) -> bool: ...

    def next_date(self) -> date: ...

    def next_sentence(self) -> str: ...


class FakerBookingData:
    def __init__(self, seed: Optional[int] = None, locale: str = "en_US"):
        self.faker = Faker(locale)
        if seed is not None:
            self.faker.seed_instance(seed)

    def next_first_name(self) -> str:
        return self.faker.first_name()

    def next_last_name(self) -> str:
        return self.faker.last_name()

    def next_price(self) -> int:
        return self.faker.random_int(min=1, max=MAX_PRICE)

    def next_boolean(self) -> bool:
        return self.faker.pybool()

    def next_date(self) -> date:
        return self.faker.date_between(start_date="-2y", end_date="+1y")

    def next_sentence(self) -> str:
        return self.faker.sentence()


def build_booking(provider: Optional[BookingDataProvider] = None) -> Booking:
    provider = provider or FakerBookingData()
    checkin = provider.next_date()
    checkout = provider.next_date()
    if checkout < checkin:
        checkin, checkout = checkout, checkin
    if checkout == checkin:
        checkout = checkin + timedelta(days=1)
    return Booking(
        firstname=provider.next_first_name(),
        lastname=provider.next_last_name(),
        totalprice=provider.next_price(),
        depositpaid=provider.next_boolean(),
        bookingdates=BookingDates(checkin=checkin.isoformat(), checkout=checkout.isoformat()),
        additionalneeds=provider.next_sentence(),
    )
