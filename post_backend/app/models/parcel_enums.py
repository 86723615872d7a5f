"""
Parcel enumerations: lifecycle status, delivery tier, contents and handling actions.
"""

import enum


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.
    
    Status flow:
        CREATED → IN_TRANSIT → DELIVERED
    """
    CREATED = "CREATED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"


class DeliveryType(str, enum.Enum):
    """Delivery tier, selects the pricing formula."""
    EXPRESS = "EXPRESS"
    DEFAULT = "DEFAULT"
    ECONOM = "ECONOM"


class ParcelDescription(str, enum.Enum):
    """Content category, used for statistics grouping."""
    CLOTHES = "CLOTHES"
    SPARE_PARTS = "SPARE_PARTS"
    GROCERIES = "GROCERIES"
    BOOKS = "BOOKS"
    MEDICATIONS = "MEDICATIONS"
    HOME_APPLIANCES = "HOME_APPLIANCES"
    MISCELLANEOUS = "MISCELLANEOUS"


class ParcelLogAction(str, enum.Enum):
    """Handling event recorded in the parcel audit trail."""
    RECEIVED = "RECEIVED"
    SENT = "SENT"
    DELIVERED = "DELIVERED"
