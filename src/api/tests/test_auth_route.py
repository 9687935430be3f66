"""Tests for authentication routes and JWT handling."""

import unittest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from jose import jwt

from api.main import app
from api.dependencies import get_user_repo
from api.security import (
    JWT_ALGORITHM,
    JWT_EXPIRATION,
    JWT_SECRET_KEY,
    create_access_token,
    verify_token,
)
from adapter.fake.user_repository import FakeUserRepository
from services.auth_service import hash_password


class TestTokens(unittest.TestCase):

    def test_round_trip(self):
        token = create_access_token('user-1')

        self.assertEqual(verify_token(token), 'user-1')

    def test_garbage_token(self):
        self.assertIsNone(verify_token('not-a-jwt'))

    def test_expired_token(self):
        past = datetime.now(timezone.utc) - timedelta(days=1)
        token = jwt.encode({"sub": "user-1", "exp": past}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)

        self.assertIsNone(verify_token(token))

    def test_token_issued_past_expiry_window(self):
        issued = datetime.now(timezone.utc) - timedelta(days=30)
        token = create_access_token('user-1', now=issued)

        self.assertIsNone(verify_token(token))

    def test_token_within_expiry_window(self):
        issued = datetime.now(timezone.utc) - JWT_EXPIRATION + timedelta(minutes=5)
        token = create_access_token('user-1', now=issued)

        self.assertEqual(verify_token(token), 'user-1')

    def test_token_without_subject(self):
        token = jwt.encode({"foo": "bar"}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)

        self.assertIsNone(verify_token(token))


class TestAuthRoutes(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.repo = FakeUserRepository()
        self.user = self.repo.create(
            email='ada@example.com', password_hash=hash_password('Str0ng!Pass'), name='Ada'
        )
        app.dependency_overrides[get_user_repo] = lambda: self.repo

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_login_returns_token_for_user(self):
        response = self.client.post(
            "/authentication/login", json={"email": "ada@example.com", "password": "Str0ng!Pass"}
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['email'], 'ada@example.com')
        self.assertEqual(verify_token(data['token']), self.user.id)

    def test_login_wrong_password(self):
        response = self.client.post(
            "/authentication/login", json={"email": "ada@example.com", "password": "Wr0ng!Pass"}
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['error'], 'INVALID_CREDENTIALS_ERROR')

    def test_login_password_over_72_bytes(self):
        response = self.client.post(
            "/authentication/login", json={"email": "ada@example.com", "password": "x" * 100}
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['error'], 'INVALID_CREDENTIALS_ERROR')

    def test_login_email_is_case_insensitive(self):
        response = self.client.post(
            "/authentication/login", json={"email": "Ada@Example.COM", "password": "Str0ng!Pass"}
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(verify_token(response.json()['token']), self.user.id)

    def test_me_with_token(self):
        token = create_access_token(self.user.id)

        response = self.client.get("/authentication/me", headers={"Authorization": f"Bearer {token}"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['id'], self.user.id)
        self.assertNotIn('password_hash', response.json())

    def test_me_without_token(self):
        response = self.client.get("/authentication/me")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers.get('www-authenticate'), 'Bearer')

    def test_me_with_invalid_token(self):
        response = self.client.get("/authentication/me", headers={"Authorization": "Bearer nope"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Invalid authentication credentials')

    def test_token_for_deleted_user_is_rejected(self):
        token = create_access_token(self.user.id)
        self.repo.delete(self.user.id)

        response = self.client.get("/users", headers={"Authorization": f"Bearer {token}"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'User not found')

    def test_login_then_list_users(self):
        login = self.client.post(
            "/authentication/login", json={"email": "ada@example.com", "password": "Str0ng!Pass"}
        )
        token = login.json()['token']

        response = self.client.get("/users", headers={"Authorization": f"Bearer {token}"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]['email'], 'ada@example.com')
        self.assertIsNotNone(response.json()[0]['last_login'])


if __name__ == '__main__':
    unittest.main()
