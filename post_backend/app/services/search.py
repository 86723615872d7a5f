"""
Dynamic search filters.

Turns optional search criteria into a list of SQLAlchemy boolean clauses.
Absent, blank or empty criteria contribute nothing, so an empty criteria
object matches every row. The same clause list backs both paginated listings
and full-scan statistics queries.
"""

from typing import Any, Iterable, List, Optional

from sqlalchemy import and_, func, true
from sqlalchemy.sql.elements import ColumnElement

from post_backend.app.models.parcel import Parcel
from post_backend.app.models.post_office import PostOffice
from post_backend.app.schemas.parcel import ParcelSearchParams
from post_backend.app.schemas.post_office import PostOfficeSearchParams


def ilike(column, value: Optional[str]) -> Optional[ColumnElement]:
    """Case-insensitive containment test."""
    if value is None or not value.strip():
        return None
    return func.lower(column).contains(value.lower(), autoescape=True)


def eq(column, value: Any) -> Optional[ColumnElement]:
    """Equality test; blank strings count as absent."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return column == value


def gte(column, value: Optional[float]) -> Optional[ColumnElement]:
    if value is None:
        return None
    return column >= value


def lte(column, value: Optional[float]) -> Optional[ColumnElement]:
    if value is None:
        return None
    return column <= value


def in_(column, values: Optional[Iterable[Any]]) -> Optional[ColumnElement]:
    values = list(values or [])
    if not values:
        return None
    return column.in_(values)


def combine(clauses: Iterable[Optional[ColumnElement]]) -> ColumnElement:
    """AND together the present clauses; no clauses means always true."""
    return and_(true(), *[clause for clause in clauses if clause is not None])


def build_parcel_filters(params: ParcelSearchParams) -> List[ColumnElement]:
    """Build the parcel clauses for every criterion present in ``params``."""
    clauses = [
        eq(Parcel.tracking_number, params.tracking_number),
        eq(Parcel.sender_client_id, params.sender_client_id),
        eq(Parcel.recipient_client_id, params.recipient_client_id),
        gte(Parcel.weight, params.from_weight),
        lte(Parcel.weight, params.to_weight),
        gte(Parcel.price, params.from_price),
        lte(Parcel.price, params.to_price),
        in_(Parcel.status, params.statuses),
        in_(Parcel.delivery_type, params.delivery_types),
        in_(Parcel.parcel_description, params.parcel_descriptions),
        eq(Parcel.origin_post_office_id, params.origin_post_office_id),
        eq(Parcel.destination_post_office_id, params.destination_post_office_id),
    ]
    return [clause for clause in clauses if clause is not None]


def parcel_predicate(params: ParcelSearchParams) -> ColumnElement:
    return combine(build_parcel_filters(params))


def build_post_office_filters(params: PostOfficeSearchParams) -> List[ColumnElement]:
    """Build the post office clauses; every field is a substring match."""
    clauses = [
        ilike(PostOffice.name, params.name),
        ilike(PostOffice.city, params.city),
        ilike(PostOffice.postcode, params.postcode),
        ilike(PostOffice.street, params.street),
    ]
    return [clause for clause in clauses if clause is not None]


def post_office_predicate(params: PostOfficeSearchParams) -> ColumnElement:
    return combine(build_post_office_filters(params))
