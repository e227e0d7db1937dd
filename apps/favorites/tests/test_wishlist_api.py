"""API tests for the wishlist."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.favorites.models import Favorite
from apps.listings.tests.factories import make_listing, make_user


class WishlistAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = make_user()
        self.host = make_user(is_host=True)
        self.listing = make_listing(self.host)
        self.url = reverse("wishlist-list")
        self.client.force_authenticate(self.user)

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_add_returns_full_wishlist(self) -> None:
        other = make_listing(self.host, title="Cabin in the woods")
        Favorite.objects.create(user=self.user, listing=other)

        response = self.client.post(self.url, {"listing_id": self.listing.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["success"])
        listing_ids = {item["listing"]["id"] for item in response.data["wishlist"]}
        self.assertEqual(listing_ids, {self.listing.id, other.id})

    def test_duplicate_is_conflict(self) -> None:
        self.client.post(self.url, {"listing_id": self.listing.id}, format="json")

        response = self.client.post(self.url, {"listing_id": self.listing.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["message"], "Listing already in wishlist.")
        self.assertEqual(Favorite.objects.count(), 1)

    def test_missing_or_hidden_listing_is_404(self) -> None:
        hidden = make_listing(self.host, is_approved=False)

        for listing_id in (999999, hidden.id):
            response = self.client.post(self.url, {"listing_id": listing_id}, format="json")
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)

    def test_list_only_own_entries(self) -> None:
        Favorite.objects.create(user=self.user, listing=self.listing)
        Favorite.objects.create(user=make_user(), listing=self.listing)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["wishlist"]), 1)

    def test_remove_is_idempotent(self) -> None:
        Favorite.objects.create(user=self.user, listing=self.listing)
        url = reverse("wishlist-detail", kwargs={"listing_id": self.listing.id})

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["wishlist"], [])

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Favorite.objects.exists())
