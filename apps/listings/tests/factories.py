"""Object builders shared by API and service tests."""

from __future__ import annotations

from decimal import Decimal
from itertools import count

from apps.listings.models import Listing
from apps.users.models import User

_sequence = count(1)


def make_user(**overrides) -> User:
    n = next(_sequence)
    fields = {
        "email": f"user{n}@example.com",
        "password": "Password123",
        "first_name": f"User{n}",
    }
    fields.update(overrides)
    return User.objects.create_user(**fields)


def make_listing(owner: User, **overrides) -> Listing:
    amenities = overrides.pop("amenities", [])
    fields = {
        "owner": owner,
        "title": "Sea view apartment",
        "description": "Bright two-bedroom flat close to the beach.",
        "property_type": Listing.PropertyType.APARTMENT,
        "category": Listing.Category.BEACH_HOUSE,
        "street": "1 Ocean Drive",
        "city": "Lisbon",
        "country": "Portugal",
        "price": Decimal("100.00"),
        "discount": Decimal("0.00"),
        "bedrooms": 2,
        "bathrooms": 1,
        "guests": 4,
        "beds": 2,
        "is_approved": True,
    }
    fields.update(overrides)
    listing = Listing.objects.create(**fields)
    if amenities:
        listing.amenities.set(amenities)
    return listing
