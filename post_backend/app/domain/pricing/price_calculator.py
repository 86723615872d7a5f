"""
Delivery Price Calculation.

Every delivery tier is bound to exactly one tariff of the form
``price = weight * rate + base_fee``:

    DEFAULT  0.2 per kg + 400
    EXPRESS  0.3 per kg + 600
    ECONOM   0.1 per kg + 200
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from post_backend.app.core.exceptions import ResourceNotFoundError
from post_backend.app.models.parcel_enums import DeliveryType


@dataclass(frozen=True)
class DeliveryTariff:
    """Linear tariff for one delivery tier."""
    rate: float
    base_fee: float

    def calculate(self, weight: float) -> float:
        return weight * self.rate + self.base_fee


DEFAULT_TARIFFS: Mapping[DeliveryType, DeliveryTariff] = MappingProxyType({
    DeliveryType.DEFAULT: DeliveryTariff(rate=0.2, base_fee=400),
    DeliveryType.EXPRESS: DeliveryTariff(rate=0.3, base_fee=600),
    DeliveryType.ECONOM: DeliveryTariff(rate=0.1, base_fee=200),
})


class PriceCalculatorRegistry:
    """
    Lookup table from delivery tier to tariff.
    
    The table is fixed at construction time; lookups never depend on
    registration order.
    """

    def __init__(self, tariffs: Optional[Mapping[DeliveryType, DeliveryTariff]] = None):
        self._tariffs = dict(DEFAULT_TARIFFS if tariffs is None else tariffs)

    def resolve(self, delivery_type: Optional[DeliveryType]) -> DeliveryTariff:
        """
        Find the tariff for a delivery tier.
        
        A missing tier falls back to DEFAULT before lookup.
        
        Raises:
            ResourceNotFoundError: If no tariff is registered for the tier.
        """
        delivery_type = delivery_type or DeliveryType.DEFAULT
        tariff = self._tariffs.get(delivery_type)
        if tariff is None:
            raise ResourceNotFoundError(
                "Price calculator", getattr(delivery_type, "value", delivery_type), field="delivery type"
            )
        return tariff

    def calculate(self, delivery_type: Optional[DeliveryType], weight: float) -> float:
        return self.resolve(delivery_type).calculate(weight)
