"""Favorites app package: each user's wishlist of listings."""
