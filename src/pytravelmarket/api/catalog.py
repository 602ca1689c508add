"""Listing browsing: services, locations, categories and reviews."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..exceptions import ApiError, ValidationError
from ..models import Category, Location, Page, PricingUnit, Review, Service, ServiceType
from .base import BaseApi
from .const import (
    CATEGORIES_ENDPOINT,
    CATEGORY_ENDPOINT,
    LOCATION_ENDPOINT,
    LOCATIONS_ENDPOINT,
    POPULAR_LOCATIONS_ENDPOINT,
    REVIEWS_ENDPOINT,
    SERVICE_ENDPOINT,
    SERVICE_REVIEWS_ENDPOINT,
    SERVICES_BY_TYPE_ENDPOINT,
    SERVICES_ENDPOINT,
    SERVICES_SEARCH_ENDPOINT,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ServiceFilter:
    page: int = 0
    size: int = 10
    min_price: float | None = None
    max_price: float | None = None
    category_id: int | None = None
    location_id: int | None = None
    min_rating: float | None = None
    keyword: str | None = None

    def to_params(self) -> dict[str, Any]:
        if self.page < 0 or self.size <= 0:
            raise ValidationError("page must be >= 0 and size must be positive.")
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValidationError("min_price must not exceed max_price.")
        return {
            "page": self.page,
            "size": self.size,
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "categoryId": self.category_id,
            "locationId": self.location_id,
            "minRating": self.min_rating or None,
            "keyword": self.keyword.strip() if self.keyword else None,
        }


class CatalogApi(BaseApi):
    """Browse and manage service listings."""

    async def list_services(self, filters: ServiceFilter | None = None) -> Page[Service]:
        data = await self._request_json(
            "GET",
            SERVICES_ENDPOINT,
            params=(filters or ServiceFilter()).to_params(),
            fallback_message="Failed to load services",
        )
        return self._map_service_page(data)

    async def list_services_by_type(
        self,
        service_type: ServiceType,
        filters: ServiceFilter | None = None,
    ) -> Page[Service]:
        service_type = ServiceType(service_type)
        _LOGGER.debug("Catalog list_services_by_type started for %s", service_type)
        data = await self._request_json(
            "GET",
            SERVICES_BY_TYPE_ENDPOINT.format(service_type=service_type.value),
            params=(filters or ServiceFilter()).to_params(),
            fallback_message=f"Failed to fetch {service_type.value.lower()} listings",
        )
        return self._map_service_page(data)

    async def search_services(
        self,
        keyword: str,
        filters: ServiceFilter | None = None,
    ) -> Page[Service]:
        if not keyword or not keyword.strip():
            raise ValidationError("keyword is required.")
        params = (filters or ServiceFilter()).to_params()
        params["keyword"] = keyword.strip()
        data = await self._request_json(
            "GET",
            SERVICES_SEARCH_ENDPOINT,
            params=params,
            fallback_message="Failed to search services",
        )
        return self._map_service_page(data)

    async def get_service(self, service_id: int) -> Service:
        data = await self._request_json(
            "GET",
            SERVICE_ENDPOINT.format(service_id=service_id),
            fallback_message="Failed to load service",
        )
        return self._map_service(self._expect_dict(data, "service"))

    async def create_service(self, data: Mapping[str, Any]) -> Service:
        self._validate_service_payload(data)
        result = await self._request_json(
            "POST",
            SERVICES_ENDPOINT,
            json=dict(data),
            fallback_message="Failed to create listing",
        )
        return self._map_service(self._expect_dict(result, "service"))

    async def update_service(self, service_id: int, data: Mapping[str, Any]) -> Service:
        self._validate_service_payload(data)
        result = await self._request_json(
            "PUT",
            SERVICE_ENDPOINT.format(service_id=service_id),
            json=dict(data),
            fallback_message="Failed to update listing",
        )
        return self._map_service(self._expect_dict(result, "service"))

    async def delete_service(self, service_id: int) -> None:
        await self._request_json(
            "DELETE",
            SERVICE_ENDPOINT.format(service_id=service_id),
            fallback_message="Failed to delete listing",
        )

    async def list_locations(self) -> list[Location]:
        data = await self._request_json(
            "GET",
            LOCATIONS_ENDPOINT,
            fallback_message="Failed to fetch locations",
        )
        return [self._map_location(item) for item in self._dict_items(data, "locations")]

    async def get_location(self, location_id: int) -> Location:
        data = await self._request_json(
            "GET",
            LOCATION_ENDPOINT.format(location_id=location_id),
            fallback_message="Failed to fetch location",
        )
        return self._map_location(self._expect_dict(data, "location"))

    async def popular_locations(self) -> list[Location]:
        data = await self._request_json(
            "GET",
            POPULAR_LOCATIONS_ENDPOINT,
            fallback_message="Failed to fetch locations",
        )
        return [self._map_location(item) for item in self._dict_items(data, "locations")]

    async def list_categories(self) -> list[Category]:
        data = await self._request_json(
            "GET",
            CATEGORIES_ENDPOINT,
            fallback_message="Failed to fetch categories",
        )
        return [self._map_category(item) for item in self._dict_items(data, "categories")]

    async def get_category(self, category_id: int) -> Category:
        data = await self._request_json(
            "GET",
            CATEGORY_ENDPOINT.format(category_id=category_id),
            fallback_message="Failed to fetch category",
        )
        return self._map_category(self._expect_dict(data, "category"))

    async def list_reviews(self, service_id: int) -> list[Review]:
        data = await self._request_json(
            "GET",
            SERVICE_REVIEWS_ENDPOINT.format(service_id=service_id),
            fallback_message="Failed to load reviews",
        )
        return [
            self._map_review(item, service_id) for item in self._dict_items(data, "reviews")
        ]

    async def create_review(self, service_id: int, rating: int, comment: str = "") -> Review:
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError("rating must be an integer between 1 and 5.")
        data = await self._request_json(
            "POST",
            REVIEWS_ENDPOINT,
            json={"serviceId": service_id, "rating": rating, "comment": comment},
            fallback_message="Failed to submit review",
        )
        return self._map_review(self._expect_dict(data, "review"), service_id)

    def _validate_service_payload(self, data: Mapping[str, Any]) -> None:
        missing = [
            key
            for key in ("title", "type", "price", "pricingUnit")
            if data.get(key) in (None, "")
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}.")
        try:
            ServiceType(data["type"])
            PricingUnit(data["pricingUnit"])
        except ValueError as exc:
            raise ValidationError("Unknown service type or pricing unit.") from exc

    def _dict_items(self, data: Any, label: str) -> list[dict[str, Any]]:
        return [item for item in self._expect_list(data, label) if isinstance(item, dict)]

    def _map_service_page(self, data: Any) -> Page[Service]:
        if isinstance(data, list):
            items = [self._map_service(item) for item in data if isinstance(item, dict)]
            return Page(items=items, total_pages=1, total_elements=len(items), size=len(items))
        body = self._expect_dict(data, "services page")
        items = [
            self._map_service(item) for item in self._dict_items(body.get("content"), "services")
        ]
        return Page(
            items=items,
            total_pages=self._coerce_optional_int(body.get("totalPages")) or 0,
            total_elements=self._coerce_optional_int(body.get("totalElements")) or 0,
            size=self._coerce_optional_int(body.get("size")) or 0,
            number=self._coerce_optional_int(body.get("number")) or 0,
        )

    def _map_service(self, item: dict[str, Any]) -> Service:
        try:
            service_type = ServiceType(item.get("type"))
            pricing_unit = PricingUnit(item.get("pricingUnit"))
        except ValueError as exc:
            raise ApiError("API returned a service with an unknown type or pricing unit.") from exc
        rating = item.get("avgRating")
        return Service(
            id=self._coerce_id(item.get("id"), "service"),
            title=item.get("title") or "",
            type=service_type,
            price=self._coerce_float(item.get("price")),
            pricing_unit=pricing_unit,
            capacity=self._coerce_optional_int(item.get("capacity")),
            address=item.get("address") or "",
            avg_rating=self._coerce_float(rating) if rating is not None else None,
            review_count=self._coerce_optional_int(item.get("reviewCount")) or 0,
            is_verified=item.get("isVerified") is True,
            thumbnail_url=item.get("thumbnailUrl") or None,
        )

    def _map_location(self, item: dict[str, Any]) -> Location:
        return Location(
            id=self._coerce_id(item.get("id"), "location"),
            city=item.get("city") or "",
            region=item.get("region") or "",
            country=item.get("country") or "",
            is_popular=item.get("isPopular") is True,
        )

    def _map_category(self, item: dict[str, Any]) -> Category:
        return Category(
            id=self._coerce_id(item.get("id"), "category"),
            name=item.get("name") or "",
            description=item.get("description") or "",
            is_active=item.get("isActive") is not False,
        )

    def _map_review(self, item: dict[str, Any], service_id: int) -> Review:
        return Review(
            id=self._coerce_id(item.get("id"), "review"),
            service_id=self._coerce_optional_int(item.get("serviceId")) or service_id,
            rating=self._coerce_optional_int(item.get("rating")) or 0,
            comment=item.get("comment") or "",
        )
