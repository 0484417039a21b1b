from restful_booker.client import ApiConnectionError, ApiContext, ApiError, ApiResponse, ApiResponseError, api_context
from restful_booker.models import Booking, BookingDates, BookingList, BookingResponse, BookingSummary, Token

__all__ = [
    "ApiConnectionError",
    "ApiContext",
    "ApiError",
    "ApiResponse",
    "ApiResponseError",
    "api_context",
    "Booking",
    "BookingDates",
    "BookingList",
    "BookingResponse",
    "BookingSummary",
    "Token",
]
