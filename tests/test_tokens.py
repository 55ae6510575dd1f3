"""Unit tests for iacp.services.tokens: claim set selection, expiry parsing, sign/verify."""

import unittest
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

from iacp.services.errors import InvalidTokenError
from iacp.services.tokens import build_payload, parse_expiry, sign, verify


def _user() -> SimpleNamespace:
    return SimpleNamespace(id=7, username="alice", email="alice@example.com", phone="+15550001")


def _config(user_id: bool = True, username: bool = True, email: bool = True, expiry: str = "24h") -> SimpleNamespace:
    return SimpleNamespace(
        include_user_id=user_id,
        include_username=username,
        include_email=email,
        token_expiry=expiry,
    )


class TestParseExpiry(unittest.TestCase):
    def test_units(self) -> None:
        self.assertEqual(parse_expiry("45s"), 45)
        self.assertEqual(parse_expiry("30m"), 30 * 60)
        self.assertEqual(parse_expiry("24h"), 24 * 3600)
        self.assertEqual(parse_expiry("7d"), 7 * 86400)

    def test_amounts_beyond_timedelta_range(self) -> None:
        self.assertEqual(parse_expiry("10000000000d"), 10_000_000_000 * 86400)

    def test_rejects_malformed(self) -> None:
        for bad in ("", "24", "h", "1.5h", "10w", "-1h", "24 hours"):
            with self.subTest(expiry=bad):
                with self.assertRaises(ValueError):
                    parse_expiry(bad)


class TestBuildPayload(unittest.TestCase):
    """Only claims whose flag is enabled are present; iat always is."""

    def test_all_enabled(self) -> None:
        payload = build_payload(_user(), _config())
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["username"], "alice")
        self.assertEqual(payload["email"], "alice@example.com")
        self.assertIsInstance(payload["iat"], int)

    def test_username_only(self) -> None:
        payload = build_payload(_user(), _config(user_id=False, username=True, email=False))
        self.assertEqual(set(payload), {"username", "iat"})

    def test_all_disabled_leaves_iat(self) -> None:
        payload = build_payload(_user(), _config(user_id=False, username=False, email=False))
        self.assertEqual(set(payload), {"iat"})

    def test_phone_never_included(self) -> None:
        payload = build_payload(_user(), _config())
        self.assertNotIn("phone", payload)

    def test_iat_uses_given_time(self) -> None:
        now = datetime(2025, 1, 1, tzinfo=UTC)
        self.assertEqual(build_payload(_user(), _config(), now=now)["iat"], int(now.timestamp()))


class TestSignAndVerify(unittest.TestCase):
    def test_decoded_payload_respects_claim_config(self) -> None:
        payload = build_payload(_user(), _config(user_id=False, username=True, email=False))
        decoded = verify(sign(payload, "1h"))
        self.assertEqual(decoded["username"], "alice")
        self.assertIn("iat", decoded)
        self.assertNotIn("sub", decoded)
        self.assertNotIn("email", decoded)

    def test_exp_is_iat_plus_expiry(self) -> None:
        payload = build_payload(_user(), _config())
        decoded = verify(sign(payload, "30m"))
        self.assertEqual(decoded["exp"] - decoded["iat"], 30 * 60)

    def test_very_long_expiry_still_signs(self) -> None:
        decoded = verify(sign(build_payload(_user(), _config()), "10000000000d"))
        self.assertEqual(decoded["exp"] - decoded["iat"], 10_000_000_000 * 86400)

    def test_expired_token_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=2)
        token = sign(build_payload(_user(), _config(), now=issued), "1h")
        with self.assertRaises(InvalidTokenError) as ctx:
            verify(token)
        self.assertIsNotNone(ctx.exception.cause)

    def test_tampered_token_rejected(self) -> None:
        token = sign(build_payload(_user(), _config()), "1h")
        other = sign({"username": "mallory", "iat": 0}, "1h")
        header, _body, signature = token.split(".")
        tampered = ".".join([header, other.split(".")[1], signature])
        with self.assertRaises(InvalidTokenError):
            verify(tampered)

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            verify("not.a.token")

    def test_sign_rejects_bad_expiry(self) -> None:
        with self.assertRaises(ValueError):
            sign({"iat": 0}, "forever")


if __name__ == "__main__":
    unittest.main()
