"""
Tests for dynamic parcel and post office search filters.
"""

import pytest
from sqlalchemy import select

from post_backend.app.core.pagination import PageParams
from post_backend.app.models.client import Client
from post_backend.app.models.parcel import Parcel
from post_backend.app.models.parcel_enums import ParcelStatus, DeliveryType, ParcelDescription
from post_backend.app.models.post_office import PostOffice
from post_backend.app.schemas.parcel import ParcelCreate, ParcelSearchParams
from post_backend.app.schemas.post_office import PostOfficeSearchParams
from post_backend.app.services.search import (
    build_parcel_filters, build_post_office_filters, post_office_predicate
)


@pytest.fixture
async def parcels(parcel_service, post_network, db_session):
    """
    Four parcels with distinct weights, tiers and contents.
    
    TRK-00001: 10kg  DEFAULT  BOOKS      402.0  CREATED     origin→destination
    TRK-00002: 50kg  EXPRESS  CLOTHES    615.0  IN_TRANSIT  origin→destination
    TRK-00003: 5kg   ECONOM   GROCERIES  200.5  DELIVERED   destination→origin (bob→alice)
    TRK-00004: 100kg DEFAULT  BOOKS      420.0  CREATED     origin→destination
    """
    n = post_network
    specs = [
        (10, DeliveryType.DEFAULT, ParcelDescription.BOOKS, n["sender_id"], n["recipient_id"], n["origin_id"], n["destination_id"]),
        (50, DeliveryType.EXPRESS, ParcelDescription.CLOTHES, n["sender_id"], n["recipient_id"], n["origin_id"], n["destination_id"]),
        (5, DeliveryType.ECONOM, ParcelDescription.GROCERIES, n["recipient_id"], n["sender_id"], n["destination_id"], n["origin_id"]),
        (100, DeliveryType.DEFAULT, ParcelDescription.BOOKS, n["sender_id"], n["recipient_id"], n["origin_id"], n["destination_id"]),
    ]
    created = []
    for weight, tier, description, sender, recipient, origin, destination in specs:
        created.append(await parcel_service.create(ParcelCreate(
            sender_client_id=sender,
            recipient_client_id=recipient,
            weight=weight,
            delivery_type=tier,
            parcel_description=description,
            origin_post_office_id=origin,
            destination_post_office_id=destination,
        )))
    await parcel_service.send(created[1].tracking_number)
    await parcel_service.update_status(created[2].tracking_number, ParcelStatus.DELIVERED)
    return created


async def matching_numbers(parcel_service, **criteria):
    found, total = await parcel_service.find_all(ParcelSearchParams(**criteria), PageParams(page=1, page_size=100))
    assert total == len(found)
    return {p.tracking_number for p in found}


ALL = {"TRK-00001", "TRK-00002", "TRK-00003", "TRK-00004"}


def test_empty_criteria_builds_no_filters():
    assert build_parcel_filters(ParcelSearchParams()) == []
    assert build_post_office_filters(PostOfficeSearchParams()) == []


def test_blank_values_are_ignored():
    params = ParcelSearchParams(tracking_number="", statuses=[], delivery_types=[])
    assert build_parcel_filters(params) == []
    assert build_parcel_filters(ParcelSearchParams(tracking_number="   ")) == []
    assert build_parcel_filters(ParcelSearchParams(tracking_number="\t\n")) == []
    assert build_post_office_filters(PostOfficeSearchParams(name="   ", city="")) == []


@pytest.mark.asyncio
async def test_empty_criteria_returns_everything(parcel_service, parcels):
    assert await matching_numbers(parcel_service) == ALL


@pytest.mark.asyncio
@pytest.mark.parametrize("criteria, expected", [
    ({"tracking_number": "TRK-00003"}, {"TRK-00003"}),
    ({"tracking_number": "TRK-0000"}, set()),
    ({"from_weight": 10}, {"TRK-00001", "TRK-00002", "TRK-00004"}),
    ({"to_weight": 10}, {"TRK-00001", "TRK-00003"}),
    ({"from_weight": 10, "to_weight": 50}, {"TRK-00001", "TRK-00002"}),
    ({"from_price": 402, "to_price": 420}, {"TRK-00001", "TRK-00004"}),
    ({"to_price": 402}, {"TRK-00001", "TRK-00003"}),
    ({"statuses": [ParcelStatus.CREATED]}, {"TRK-00001", "TRK-00004"}),
    ({"statuses": [ParcelStatus.IN_TRANSIT, ParcelStatus.DELIVERED]}, {"TRK-00002", "TRK-00003"}),
    ({"delivery_types": [DeliveryType.EXPRESS, DeliveryType.ECONOM]}, {"TRK-00002", "TRK-00003"}),
    ({"parcel_descriptions": [ParcelDescription.BOOKS]}, {"TRK-00001", "TRK-00004"}),
    ({"parcel_descriptions": [ParcelDescription.MEDICATIONS]}, set()),
])
async def test_single_criterion(parcel_service, parcels, criteria, expected):
    assert await matching_numbers(parcel_service, **criteria) == expected


@pytest.mark.asyncio
async def test_reference_criteria(parcel_service, parcels, post_network):
    n = post_network
    assert await matching_numbers(parcel_service, sender_client_id=n["recipient_id"]) == {"TRK-00003"}
    assert await matching_numbers(parcel_service, recipient_client_id=n["recipient_id"]) == ALL - {"TRK-00003"}
    assert await matching_numbers(parcel_service, origin_post_office_id=n["destination_id"]) == {"TRK-00003"}
    assert await matching_numbers(parcel_service, destination_post_office_id=n["destination_id"]) == ALL - {"TRK-00003"}


@pytest.mark.asyncio
async def test_combined_criteria_intersect(parcel_service, parcels, post_network):
    criteria = {
        "from_weight": 10,
        "delivery_types": [DeliveryType.DEFAULT, DeliveryType.EXPRESS],
        "statuses": [ParcelStatus.CREATED],
        "origin_post_office_id": post_network["origin_id"],
    }
    
    expected = set(ALL)
    for key, value in criteria.items():
        expected &= await matching_numbers(parcel_service, **{key: value})
    
    assert await matching_numbers(parcel_service, **criteria) == expected == {"TRK-00001", "TRK-00004"}


@pytest.mark.asyncio
async def test_pagination_keeps_total(parcel_service, parcels):
    page_one, total = await parcel_service.find_all(ParcelSearchParams(), PageParams(page=1, page_size=3))
    page_two, _ = await parcel_service.find_all(ParcelSearchParams(), PageParams(page=2, page_size=3))
    
    assert total == 4
    assert [p.tracking_number for p in page_one] == ["TRK-00001", "TRK-00002", "TRK-00003"]
    assert [p.tracking_number for p in page_two] == ["TRK-00004"]


@pytest.mark.asyncio
async def test_statistic_uses_same_filters(parcel_service, parcels):
    params = ParcelSearchParams(parcel_descriptions=[ParcelDescription.BOOKS])
    
    stats = await parcel_service.build_statistic(params)
    found, total = await parcel_service.find_all(params, PageParams(page=1, page_size=1))
    
    assert stats.total_parcels == total == 2
    assert stats.average_weight == pytest.approx(55)
    assert stats.average_price == pytest.approx(411)
    assert stats.heaviest_parcel.tracking_number == "TRK-00004"
    assert stats.cheapest_parcel.tracking_number == "TRK-00001"
    assert stats.parcels_count_by_delivery_type[DeliveryType.DEFAULT] == 2


@pytest.mark.asyncio
async def test_statistic_for_no_matches(parcel_service, parcels):
    stats = await parcel_service.build_statistic(ParcelSearchParams(tracking_number="missing"))
    
    assert stats.total_parcels == 0
    assert stats.average_price == 0
    assert stats.most_expensive_parcel is None


@pytest.mark.asyncio
async def test_post_office_substring_search_is_case_insensitive(db_session, post_network):
    db_session.add(PostOffice(name="Kyiv 100%", city="Kyiv", postcode="02000", street="Lesi Ukrainky 5"))
    await db_session.commit()
    
    async def names(**criteria):
        result = await db_session.execute(
            select(PostOffice).where(post_office_predicate(PostOfficeSearchParams(**criteria)))
        )
        return {p.name for p in result.scalars().all()}
    
    assert await names(city="KYIV") == {"Kyiv Central", "Kyiv 100%"}
    assert await names(name="main") == {"Lviv Main"}
    assert await names(city="kyiv", postcode="010") == {"Kyiv Central"}
    assert await names(name="100%") == {"Kyiv 100%"}
    assert await names(street="nowhere") == set()
