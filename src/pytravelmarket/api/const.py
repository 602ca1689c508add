"""Endpoint paths and header constants for the marketplace API."""

LOGIN_ENDPOINT = "/auth/login"
REGISTER_ENDPOINT = "/auth/register"
REFRESH_ENDPOINT = "/auth/refresh"
CURRENT_USER_ENDPOINT = "/users/me"

SERVICES_ENDPOINT = "/services"
SERVICE_ENDPOINT = "/services/{service_id}"
SERVICES_BY_TYPE_ENDPOINT = "/services/type/{service_type}"
SERVICES_SEARCH_ENDPOINT = "/services/search"
LOCATIONS_ENDPOINT = "/locations"
LOCATION_ENDPOINT = "/locations/{location_id}"
POPULAR_LOCATIONS_ENDPOINT = "/locations/popular"
CATEGORIES_ENDPOINT = "/categories"
CATEGORY_ENDPOINT = "/categories/{category_id}"
REVIEWS_ENDPOINT = "/reviews"
SERVICE_REVIEWS_ENDPOINT = "/reviews/service/{service_id}"

BOOKINGS_ENDPOINT = "/bookings"
BOOKING_ENDPOINT = "/bookings/{booking_id}"
BOOKING_STATUS_ENDPOINT = "/bookings/{booking_id}/status"
PROVIDER_BOOKINGS_ENDPOINT = "/bookings/provider"
PROVIDER_BOOKING_STATS_ENDPOINT = "/bookings/provider/stats"

AVAILABILITIES_ENDPOINT = "/availabilities"
AVAILABILITY_ENDPOINT = "/availabilities/{availability_id}"
AVAILABILITIES_BULK_ENDPOINT = "/availabilities/bulk"
SERVICE_AVAILABILITIES_ENDPOINT = "/availabilities/service/{service_id}"
SERVICE_AVAILABLE_DATES_ENDPOINT = "/availabilities/service/{service_id}/available"

AUTH_HEADER = "Authorization"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": "pytravelmarket",
}

UNAUTHORIZED_CODE = "unauthorized"
FORBIDDEN_CODE = "forbidden"
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."
