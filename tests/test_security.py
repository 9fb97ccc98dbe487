"""Unit tests for tasktracker.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import timedelta
from unittest.mock import patch

import jwt

from tasktracker.core.config import Settings, get_settings
from tasktracker.core.security import (
    ExpiredToken,
    InvalidToken,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


@patch("tasktracker.core.security.BCRYPT_ROUNDS", 4)
class TestPasswordHashing(unittest.TestCase):
    """hash_password never returns the plain text; verify_password checks it."""

    def test_round_trip(self) -> None:
        hashed = hash_password("Secret123")
        self.assertNotEqual(hashed, "Secret123")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("Secret123", hashed))
        self.assertFalse(verify_password("secret123", hashed))

    def test_salted(self) -> None:
        self.assertNotEqual(hash_password("same"), hash_password("same"))

    def test_malformed_hash_is_false(self) -> None:
        self.assertFalse(verify_password("Secret123", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """create_access_token / decode_access_token."""

    def test_claims(self) -> None:
        token = create_access_token(sub=42, role="admin")
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "42")
        self.assertEqual(payload["role"], "admin")
        self.assertEqual(
            payload["exp"] - payload["iat"],
            get_settings().JWT_EXPIRE_MINUTES * 60,
        )

    def test_default_expiry_is_seven_days(self) -> None:
        self.assertEqual(Settings.model_fields["JWT_EXPIRE_MINUTES"].default, 7 * 24 * 60)

    def test_expired(self) -> None:
        token = create_access_token(sub=1, role="user", expires_delta=timedelta(seconds=-1))
        with self.assertRaises(ExpiredToken) as ctx:
            decode_access_token(token)
        self.assertIsInstance(ctx.exception, InvalidToken)
        self.assertEqual(ctx.exception.message, "Token expired")

    def test_tampered_signature(self) -> None:
        token = create_access_token(sub=1, role="user")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with self.assertRaises(InvalidToken) as ctx:
            decode_access_token(tampered)
        self.assertNotIsInstance(ctx.exception, ExpiredToken)
        self.assertEqual(ctx.exception.message, "Invalid token")

    def test_garbage(self) -> None:
        for token in ("", "abc", "a.b.c"):
            with self.subTest(token=token):
                with self.assertRaises(InvalidToken):
                    decode_access_token(token)

    def test_missing_exp_rejected(self) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"sub": "1"},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(InvalidToken):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
