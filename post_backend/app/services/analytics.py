"""
Parcel Analytics Service.

Aggregates a filtered set of parcels into a single statistics summary.
Focused on READ-ONLY operations.
"""

from typing import Dict, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from post_backend.app.models.parcel import Parcel
from post_backend.app.models.parcel_enums import ParcelStatus, DeliveryType, ParcelDescription
from post_backend.app.schemas.parcel import ParcelSearchParams, ParcelStatistic, ParcelResponse
from post_backend.app.services.search import parcel_predicate


class ParcelStatisticsAggregator:
    """
    Single-pass accumulator for parcel statistics.
    
    Counters start at zero for every enum member so categories without parcels
    still show up. Extremes are replaced only on a strict improvement, so the
    earliest parcel wins ties.
    """

    def __init__(self):
        self.total_parcels = 0
        self.total_weight = 0.0
        self.total_price = 0.0
        self.count_by_status: Dict[ParcelStatus, int] = {status: 0 for status in ParcelStatus}
        self.count_by_delivery_type: Dict[DeliveryType, int] = {tier: 0 for tier in DeliveryType}
        self.count_by_description: Dict[ParcelDescription, int] = {desc: 0 for desc in ParcelDescription}
        self.most_expensive: Optional[Parcel] = None
        self.cheapest: Optional[Parcel] = None
        self.heaviest: Optional[Parcel] = None
        self.lightest: Optional[Parcel] = None

    def add(self, parcel: Parcel) -> None:
        self.total_parcels += 1
        self.total_weight += parcel.weight
        self.total_price += parcel.price

        self.count_by_status[parcel.status] += 1
        self.count_by_delivery_type[parcel.delivery_type] += 1
        self.count_by_description[parcel.parcel_description] += 1

        if self.most_expensive is None or parcel.price > self.most_expensive.price:
            self.most_expensive = parcel
        if self.cheapest is None or parcel.price < self.cheapest.price:
            self.cheapest = parcel
        if self.heaviest is None or parcel.weight > self.heaviest.weight:
            self.heaviest = parcel
        if self.lightest is None or parcel.weight < self.lightest.weight:
            self.lightest = parcel

    @property
    def average_weight(self) -> float:
        return self.total_weight / self.total_parcels if self.total_parcels > 0 else 0.0

    @property
    def average_price(self) -> float:
        return self.total_price / self.total_parcels if self.total_parcels > 0 else 0.0

    def summary(self) -> ParcelStatistic:
        return ParcelStatistic(
            total_parcels=self.total_parcels,
            average_weight=self.average_weight,
            average_price=self.average_price,
            parcels_count_by_status=dict(self.count_by_status),
            parcels_count_by_delivery_type=dict(self.count_by_delivery_type),
            parcels_count_by_description=dict(self.count_by_description),
            most_expensive_parcel=_to_response(self.most_expensive),
            cheapest_parcel=_to_response(self.cheapest),
            heaviest_parcel=_to_response(self.heaviest),
            lightest_parcel=_to_response(self.lightest),
        )


def _to_response(parcel: Optional[Parcel]) -> Optional[ParcelResponse]:
    if parcel is None:
        return None
    return ParcelResponse.model_validate(parcel)


def aggregate_parcels(parcels: Iterable[Parcel]) -> ParcelStatistic:
    """Reduce parcels to a statistics summary in one pass."""
    aggregator = ParcelStatisticsAggregator()
    for parcel in parcels:
        aggregator.add(parcel)
    return aggregator.summary()


class AnalyticsService:

    @staticmethod
    async def get_parcel_statistic(db: AsyncSession, params: ParcelSearchParams) -> ParcelStatistic:
        """Get statistics for every parcel matching the search criteria."""
        query = select(Parcel).where(parcel_predicate(params)).order_by(Parcel.id)
        result = await db.execute(query)
        return aggregate_parcels(result.scalars().all())
