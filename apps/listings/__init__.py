"""Listings app: rentable places, the amenity catalogue and moderation."""
