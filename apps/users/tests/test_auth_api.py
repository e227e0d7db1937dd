"""API tests for authentication and profile endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def test_register_returns_tokens(self) -> None:
        payload = {
            "email": "guest@example.com",
            "phone": "+77001234567",
            "first_name": "Guest",
            "last_name": "User",
            "password": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["success"])
        self.assertIn("tokens", response.data)
        self.assertEqual(response.data["token"], response.data["tokens"]["access"])
        self.assertEqual(response.data["user"]["email"], payload["email"])
        self.assertFalse(response.data["user"]["is_host"])
        self.assertTrue(User.objects.filter(email=payload["email"]).exists())

    def test_register_as_host(self) -> None:
        payload = {
            "email": "host@example.com",
            "first_name": "Host",
            "password": "StrongPass123",
            "is_host": True,
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(User.objects.get(email="host@example.com").is_host)

    def test_register_rejects_duplicate_email(self) -> None:
        User.objects.create_user(email="taken@example.com", password="Password123")
        payload = {"email": "taken@example.com", "first_name": "Again", "password": "Password123"}

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertFalse(response.data["success"])
        self.assertIn("email", response.data["errors"])

    def test_login_with_valid_credentials(self) -> None:
        User.objects.create_user(email="login@example.com", password="CorrectPassword1")

        response = self.client.post(
            reverse("auth:login"),
            {"email": "login@example.com", "password": "CorrectPassword1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["success"])
        self.assertIn("refresh", response.data["tokens"])

    def test_login_with_wrong_password(self) -> None:
        User.objects.create_user(email="login@example.com", password="CorrectPassword1")

        response = self.client.post(
            reverse("auth:login"),
            {"email": "login@example.com", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, response.data)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["message"], "Invalid credentials.")

    def test_refresh_issues_new_access_token(self) -> None:
        User.objects.create_user(email="refresh@example.com", password="CorrectPassword1")
        login = self.client.post(
            reverse("auth:login"),
            {"email": "refresh@example.com", "password": "CorrectPassword1"},
            format="json",
        )

        response = self.client.post(
            reverse("auth:token_refresh"),
            {"refresh": login.data["tokens"]["refresh"]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data)


class ProfileAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="me@example.com",
            password="Password123",
            first_name="Me",
        )
        self.url = reverse("user-me")

    def test_requires_authentication(self) -> None:
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])

    def test_get_profile(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["email"], "me@example.com")

    def test_patch_profile(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.patch(
            self.url,
            {"about": "Loves mountains", "is_host": True},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.about, "Loves mountains")
        self.assertFalse(self.user.is_host)
