"""API tests for listing search, CRUD, availability and moderation."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.listings.models import Amenity, Listing
from apps.listings.tests.factories import make_listing, make_user


class ListingSearchTests(APITestCase):
    def setUp(self) -> None:
        self.host = make_user(is_host=True)
        self.wifi = Amenity.objects.create(name="WiFi", icon="fa-wifi")
        self.pool = Amenity.objects.create(name="Pool", icon="fa-swimming-pool")
        self.lisbon = make_listing(
            self.host,
            city="Lisbon",
            price=Decimal("80.00"),
            guests=2,
            bedrooms=1,
            amenities=[self.wifi],
        )
        self.porto = make_listing(
            self.host,
            city="Porto",
            price=Decimal("150.00"),
            guests=6,
            bedrooms=3,
            property_type=Listing.PropertyType.VILLA,
            amenities=[self.wifi, self.pool],
        )
        self.pending = make_listing(make_user(), city="Lisbon", is_approved=False)
        self.url = reverse("listing-list")

    def _ids(self, response) -> set[int]:  # type: ignore
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["success"])
        return {item["id"] for item in response.data["listings"]}

    def test_anonymous_sees_only_approved(self) -> None:
        self.assertEqual(self._ids(self.client.get(self.url)), {self.lisbon.id, self.porto.id})

    def test_owner_also_sees_own_pending(self) -> None:
        self.client.force_authenticate(self.pending.owner)
        self.assertEqual(
            self._ids(self.client.get(self.url)),
            {self.lisbon.id, self.porto.id, self.pending.id},
        )

    def test_location_is_case_insensitive(self) -> None:
        self.assertEqual(self._ids(self.client.get(self.url, {"location": "lis"})), {self.lisbon.id})

    def test_numeric_filters(self) -> None:
        self.assertEqual(self._ids(self.client.get(self.url, {"min_price": 100})), {self.porto.id})
        self.assertEqual(self._ids(self.client.get(self.url, {"max_price": 100})), {self.lisbon.id})
        self.assertEqual(self._ids(self.client.get(self.url, {"guests": 3})), {self.porto.id})
        self.assertEqual(self._ids(self.client.get(self.url, {"bedrooms": 2})), {self.porto.id})

    def test_property_type_filter(self) -> None:
        self.assertEqual(self._ids(self.client.get(self.url, {"property_type": "Villa"})), {self.porto.id})

    def test_amenities_require_all(self) -> None:
        both = f"{self.wifi.id},{self.pool.id}"
        self.assertEqual(self._ids(self.client.get(self.url, {"amenities": both})), {self.porto.id})
        self.assertEqual(
            self._ids(self.client.get(self.url, {"amenities": str(self.wifi.id)})),
            {self.lisbon.id, self.porto.id},
        )


class ListingDetailTests(APITestCase):
    def setUp(self) -> None:
        self.owner = make_user()
        self.listing = make_listing(self.owner, is_approved=False)
        self.url = reverse("listing-detail", args=[self.listing.id])

    def test_unapproved_hidden_from_others(self) -> None:
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data["success"])

        self.client.force_authenticate(make_user())
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_404_NOT_FOUND)

    def test_owner_and_staff_see_unapproved(self) -> None:
        self.client.force_authenticate(self.owner)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_200_OK)

        self.client.force_authenticate(make_user(is_staff=True))
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["listing"]["reviews"], [])


class ListingWriteTests(APITestCase):
    def setUp(self) -> None:
        self.host = make_user(is_host=True)
        self.guest = make_user()
        self.wifi = Amenity.objects.create(name="WiFi", icon="fa-wifi")
        self.url = reverse("listing-list")

    def _payload(self, **overrides) -> dict:
        payload = {
            "title": "Loft",
            "description": "Open-plan loft.",
            "property_type": "Apartment",
            "category": "Apartment",
            "street": "5 Main St",
            "city": "Berlin",
            "country": "Germany",
            "price": "120.00",
            "discount": "5",
            "bedrooms": 1,
            "bathrooms": 1,
            "guests": 2,
            "beds": 1,
            "amenities": [self.wifi.id],
            "rules": [" No smoking ", "", "No parties"],
            "images": ["uploads/loft-1.jpg"],
        }
        payload.update(overrides)
        return payload

    def test_host_listing_is_auto_approved(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        body = response.data["listing"]
        self.assertTrue(body["is_approved"])
        self.assertEqual(body["rules"], ["No smoking", "No parties"])
        self.assertEqual(body["amenities"][0]["name"], "WiFi")
        self.assertEqual(body["owner"]["id"], self.host.id)

    def test_non_host_listing_waits_for_approval(self) -> None:
        self.client.force_authenticate(self.guest)
        response = self.client.post(self.url, self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertFalse(response.data["listing"]["is_approved"])

    def test_anonymous_cannot_create(self) -> None:
        response = self.client.post(self.url, self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_validation_errors(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.post(self.url, self._payload(discount="150"), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("discount", response.data["errors"])

        response = self.client.post(self.url, self._payload(property_type="Castle"), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(self.url, self._payload(title=""), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data["message"].startswith("title:"))

    def test_only_owner_can_update(self) -> None:
        listing = make_listing(self.host)
        url = reverse("listing-detail", args=[listing.id])

        self.client.force_authenticate(self.guest)
        response = self.client.patch(url, {"title": "Hijacked"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.host)
        response = self.client.patch(url, {"title": "Renamed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["listing"]["title"], "Renamed")
        self.assertTrue(response.data["listing"]["is_approved"])

    def test_update_by_non_host_clears_approval(self) -> None:
        listing = make_listing(self.guest, is_approved=True)
        self.client.force_authenticate(self.guest)

        response = self.client.patch(
            reverse("listing-detail", args=[listing.id]), {"price": "90.00"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        listing.refresh_from_db()
        self.assertFalse(listing.is_approved)

    def test_owner_deletes(self) -> None:
        listing = make_listing(self.host)
        url = reverse("listing-detail", args=[listing.id])

        self.client.force_authenticate(self.guest)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.host)
        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Listing.objects.filter(pk=listing.pk).exists())

    def test_user_listings_self_or_staff(self) -> None:
        make_listing(self.host)
        make_listing(self.host, is_approved=False)
        url = reverse("listing-by-user", kwargs={"user_id": self.host.id})

        self.client.force_authenticate(self.guest)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.host)
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["listings"]), 2)


class AvailabilityTests(APITestCase):
    def setUp(self) -> None:
        self.listing = make_listing(make_user(is_host=True), price=Decimal("100.00"), discount=Decimal("10"))
        self.url = reverse("listing-availability", args=[self.listing.id])
        self.start = timezone.localdate() + timedelta(days=10)

    def test_quote_for_free_dates(self) -> None:
        response = self.client.get(
            self.url,
            {"start_date": str(self.start), "end_date": str(self.start + timedelta(days=5))},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        body = response.data["availability"]
        self.assertTrue(body["available"])
        self.assertEqual(body["nights"], 5)
        self.assertEqual(body["total_price"], "450.00")

    def test_busy_dates(self) -> None:
        Booking.objects.create(
            customer=make_user(),
            listing=self.listing,
            start_date=self.start,
            end_date=self.start + timedelta(days=3),
        )

        response = self.client.get(
            self.url,
            {"start_date": str(self.start + timedelta(days=2)), "end_date": str(self.start + timedelta(days=4))},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["availability"]["available"])

    def test_past_dates_are_not_available(self) -> None:
        start = timezone.localdate() - timedelta(days=3)
        response = self.client.get(self.url, {"start_date": str(start), "end_date": str(start + timedelta(days=2))})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.data["availability"]
        self.assertFalse(body["available"])
        self.assertEqual(body["reason"], "Start date cannot be in the past.")

    def test_dates_outside_window_are_not_available(self) -> None:
        self.listing.available_to = self.start + timedelta(days=3)
        self.listing.save()

        response = self.client.get(
            self.url,
            {"start_date": str(self.start), "end_date": str(self.start + timedelta(days=5))},
        )

        self.assertFalse(response.data["availability"]["available"])
        self.assertIn("available until", response.data["availability"]["reason"])

    def test_too_many_guests_are_not_available(self) -> None:
        response = self.client.get(
            self.url,
            {"start_date": str(self.start), "end_date": str(self.start + timedelta(days=2)), "guests": 9},
        )

        self.assertFalse(response.data["availability"]["available"])
        self.assertIn("guests", response.data["availability"]["reason"])

    def test_unapproved_listing_is_only_bookable_by_owner(self) -> None:
        owner = make_user()
        pending = make_listing(owner, is_approved=False)
        url = reverse("listing-availability", args=[pending.id])
        params = {"start_date": str(self.start), "end_date": str(self.start + timedelta(days=2))}

        self.client.force_authenticate(make_user(is_staff=True))
        response = self.client.get(url, params)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["availability"]["available"])

        self.client.force_authenticate(owner)
        self.assertTrue(self.client.get(url, params).data["availability"]["available"])

    def test_requires_valid_range(self) -> None:
        response = self.client.get(self.url, {"start_date": str(self.start), "end_date": str(self.start)})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", response.data["errors"])


class AmenityAndModerationTests(APITestCase):
    def test_amenities_are_public(self) -> None:
        Amenity.objects.create(name="Kitchen", icon="fa-utensils")
        response = self.client.get(reverse("amenity-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["amenities"][0]["name"], "Kitchen")

    def test_moderation_is_staff_only(self) -> None:
        pending = make_listing(make_user(), is_approved=False)
        make_listing(make_user(is_host=True))
        list_url = reverse("admin-listing-list")
        approve_url = reverse("admin-listing-approve", args=[pending.id])

        self.client.force_authenticate(make_user())
        self.assertEqual(self.client.get(list_url).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.put(approve_url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(make_user(is_staff=True))
        response = self.client.get(list_url, {"is_approved": "false"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in response.data["listings"]], [pending.id])

        response = self.client.put(approve_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["listing"]["is_approved"])

        missing = reverse("admin-listing-approve", args=[999999])
        self.assertEqual(self.client.put(missing).status_code, status.HTTP_404_NOT_FOUND)
