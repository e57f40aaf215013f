"""Artisan aggregate (CQRS) — the seller profile behind every product.

An artisan profile belongs to exactly one seller user (``user_id``). Products
and order line items reference the profile by ``artisan_id``; access checks on
orders and reviews use the seller's ``user_id``.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text, ValueObject

from marketplace.catalogue.events import ArtisanRegistered
from marketplace.domain import marketplace


class VerificationStatus(Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


@marketplace.value_object(part_of="Artisan")
class Location:
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    country = String(required=True, max_length=100)


@marketplace.aggregate
class Artisan:
    user_id = Identifier(required=True)
    business_name = String(required=True, max_length=100)
    description = Text(required=True)
    specialties = Text()  # JSON array of strings
    experience_years = Integer(default=0, min_value=0)
    location = ValueObject(Location)
    rating_average = Float(default=0.0)
    rating_count = Integer(default=0)
    verification_status = String(
        choices=VerificationStatus,
        default=VerificationStatus.PENDING.value,
    )
    is_active = Boolean(default=True)
    joined_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(
        cls,
        user_id,
        business_name,
        description,
        location,
        specialties=None,
        experience_years=0,
    ):
        now = datetime.now(UTC)
        artisan = cls(
            user_id=user_id,
            business_name=business_name,
            description=description,
            specialties=json.dumps(specialties or []),
            experience_years=experience_years,
            location=Location(**location),
            rating_average=0.0,
            rating_count=0,
            verification_status=VerificationStatus.PENDING.value,
            is_active=True,
            joined_at=now,
            updated_at=now,
        )
        artisan.raise_(
            ArtisanRegistered(
                artisan_id=str(artisan.id),
                user_id=str(user_id),
                business_name=business_name,
                registered_at=now,
            )
        )
        return artisan

    @property
    def full_location(self) -> str:
        if self.location is None:
            return ""
        return f"{self.location.city}, {self.location.state}, {self.location.country}"

    def update_rating(self, average, count):
        with atomic_change(self):
            self.rating_average = average
            self.rating_count = count
            self.updated_at = datetime.now(UTC)
