from __future__ import annotations

import pytest

from pytravelmarket.api.catalog import CatalogApi, ServiceFilter
from pytravelmarket.exceptions import ApiError, ValidationError
from pytravelmarket.models import PricingUnit, ServiceType

from fakes import FakeResponse, SequenceSession, logged_in_session

BASE_URL = "https://api.example.com/api"


def _api(session: SequenceSession) -> CatalogApi:
    return CatalogApi(session, logged_in_session(), base_url=BASE_URL)


def _service_json(service_id: int = 1, **extra) -> dict:
    data = {
        "id": service_id,
        "title": "Old town walk",
        "type": "TOUR_GUIDE",
        "price": 25,
        "pricingUnit": "PER_PERSON",
        "avgRating": 4.5,
        "reviewCount": 12,
        "isVerified": True,
    }
    data.update(extra)
    return data


def test_service_filter_params() -> None:
    params = ServiceFilter(page=2, min_price=10, keyword="  beach ").to_params()
    assert params["page"] == 2
    assert params["minPrice"] == 10
    assert params["maxPrice"] is None
    assert params["keyword"] == "beach"
    with pytest.raises(ValidationError):
        ServiceFilter(min_price=20, max_price=10).to_params()


@pytest.mark.asyncio
async def test_list_services_by_type() -> None:
    body = {"content": [_service_json()], "totalPages": 1, "totalElements": 1}
    session = SequenceSession([FakeResponse(json_data=body)])
    page = await _api(session).list_services_by_type(
        ServiceType.TOUR_GUIDE, ServiceFilter(min_rating=4)
    )
    request = session.requests[0]
    assert request["url"] == f"{BASE_URL}/services/type/TOUR_GUIDE"
    assert request["params"] == {"page": "0", "size": "10", "minRating": "4"}
    service = page.items[0]
    assert service.type is ServiceType.TOUR_GUIDE
    assert service.pricing_unit is PricingUnit.PER_PERSON
    assert service.avg_rating == 4.5
    assert page.total_elements == 1


@pytest.mark.asyncio
async def test_search_requires_keyword() -> None:
    session = SequenceSession([])
    with pytest.raises(ValidationError):
        await _api(session).search_services("  ")
    assert session.calls == 0


@pytest.mark.asyncio
async def test_unknown_service_type_from_api() -> None:
    session = SequenceSession([FakeResponse(json_data=_service_json(type="SPACESHIP"))])
    with pytest.raises(ApiError):
        await _api(session).get_service(1)


@pytest.mark.asyncio
async def test_create_service_validation() -> None:
    session = SequenceSession([])
    api = _api(session)
    with pytest.raises(ValidationError):
        await api.create_service({"title": "Room"})
    with pytest.raises(ValidationError):
        await api.create_service(
            {"title": "Room", "type": "CASTLE", "price": 1, "pricingUnit": "PER_NIGHT"}
        )
    assert session.calls == 0


@pytest.mark.asyncio
async def test_locations_and_categories() -> None:
    session = SequenceSession(
        [
            FakeResponse(json_data=[{"id": 1, "city": "Lisbon", "isPopular": True}, "noise"]),
            FakeResponse(json_data=[{"id": 2, "name": "Outdoors"}]),
        ]
    )
    api = _api(session)
    locations = await api.popular_locations()
    categories = await api.list_categories()
    assert [location.city for location in locations] == ["Lisbon"]
    assert locations[0].is_popular is True
    assert categories[0].is_active is True


@pytest.mark.asyncio
async def test_create_review_rating_bounds() -> None:
    session = SequenceSession([FakeResponse(json_data={"id": 9, "rating": 5})])
    api = _api(session)
    with pytest.raises(ValidationError):
        await api.create_review(1, 6)
    review = await api.create_review(1, 5, "Great")
    assert review.service_id == 1
    assert session.requests[0]["json"] == {"serviceId": 1, "rating": 5, "comment": "Great"}
