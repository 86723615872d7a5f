"""
Identifier generators.
"""

import uuid
from typing import Callable

TrackingNumberGenerator = Callable[[], str]


def uuid_tracking_number() -> str:
    """Random UUID4 string, unique for every call."""
    return str(uuid.uuid4())
