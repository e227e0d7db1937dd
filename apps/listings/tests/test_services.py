from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from apps.listings.models import Amenity
from apps.listings.services import approval_on_update, seed_default_amenities
from apps.listings.tests.factories import make_listing, make_user


@pytest.mark.django_db
def test_seed_is_idempotent(settings):
    settings.DEFAULT_AMENITIES = [
        {"name": "WiFi", "icon": "fa-wifi"},
        {"name": "Kitchen", "icon": "fa-utensils"},
    ]

    assert seed_default_amenities() == 2
    assert seed_default_amenities() == 0
    assert Amenity.objects.get(name="WiFi").icon == "fa-wifi"


@pytest.mark.django_db
def test_seed_command_uses_settings():
    out = StringIO()
    call_command("seed_amenities", stdout=out)

    assert Amenity.objects.count() == 18
    assert "Amenities created: 18" in out.getvalue()


@pytest.mark.django_db
def test_staff_edit_keeps_approval():
    owner = make_user()
    listing = make_listing(owner, is_approved=True)

    assert approval_on_update(listing, make_user(is_staff=True)) is True
    assert approval_on_update(listing, owner) is False
