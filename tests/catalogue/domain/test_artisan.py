"""Tests for the Artisan aggregate."""

import json

import pytest
from protean.exceptions import ValidationError

from marketplace.catalogue.artisan import Artisan, VerificationStatus
from marketplace.catalogue.events import ArtisanRegistered


def _register(**overrides):
    defaults = {
        "user_id": "seller-001",
        "business_name": "Kutch Embroidery Collective",
        "description": "Mirror-work embroidery from Kutch",
        "location": {"city": "Bhuj", "state": "Gujarat", "country": "India"},
    }
    defaults.update(overrides)
    return Artisan.register(**defaults)


class TestArtisanRegistration:
    def test_register_defaults(self):
        artisan = _register()
        assert artisan.verification_status == VerificationStatus.PENDING.value
        assert artisan.is_active is True
        assert artisan.rating_count == 0
        assert json.loads(artisan.specialties) == []

    def test_register_raises_event(self):
        artisan = _register()
        assert isinstance(artisan._events[-1], ArtisanRegistered)

    def test_location_requires_city(self):
        with pytest.raises(ValidationError):
            _register(location={"state": "Gujarat", "country": "India"})

    def test_full_location(self):
        assert _register().full_location == "Bhuj, Gujarat, India"

    def test_update_rating(self):
        artisan = _register()
        artisan.update_rating(4.5, 2)
        assert artisan.rating_average == 4.5
        assert artisan.rating_count == 2
