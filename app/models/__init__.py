# app/models/__init__.py
from app.infra.base import Base
from app.models.attribute_group import AttributeGroup, AttributeGroupVariant
from app.models.profile import (
    AvailabilitySlot,
    Profile,
    ProfileAvailability,
    ProfileFeature,
    ProfileMedia,
    ProfileRate,
)
from app.models.profile_verification import ProfileVerification
from app.models.user import User

__all__ = [
    "AttributeGroup",
    "AttributeGroupVariant",
    "AvailabilitySlot",
    "Profile",
    "ProfileAvailability",
    "ProfileFeature",
    "ProfileMedia",
    "ProfileRate",
    "ProfileVerification",
    "User",
    "create_db_and_tables",
]


def create_db_and_tables(bind=None) -> None:
    if bind is None:
        from app.infra.session import engine as bind

    Base.metadata.create_all(bind=bind)
