"""Tests for iacp.services.claim_config: lazy singleton creation and partial updates."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from iacp.models import ClaimConfig
from iacp.schemas.config import ClaimConfigUpdate
from iacp.services.claim_config import get_claim_config, update_claim_config
from tests.support import DatabaseTestCase


class TestGetClaimConfig(DatabaseTestCase):
    """get_claim_config creates the default row once and then returns it."""

    def test_empty_store_gets_defaults(self) -> None:
        config = get_claim_config(self.db)
        self.assertTrue(config.include_username)
        self.assertTrue(config.include_email)
        self.assertTrue(config.include_user_id)
        self.assertEqual(config.token_expiry, "24h")

    def test_second_get_does_not_create_another_row(self) -> None:
        first = get_claim_config(self.db)
        second = get_claim_config(self.db)
        self.assertEqual(first.id, second.id)
        self.assertEqual(self.db.query(ClaimConfig).count(), 1)


class TestUpdateClaimConfig(DatabaseTestCase):
    """update_claim_config only touches the supplied fields."""

    def test_partial_update_keeps_other_fields(self) -> None:
        get_claim_config(self.db)
        updated = update_claim_config(self.db, ClaimConfigUpdate(Email=False))
        self.assertFalse(updated.include_email)
        self.assertTrue(updated.include_username)
        self.assertTrue(updated.include_user_id)
        self.assertEqual(updated.token_expiry, "24h")

    def test_update_before_first_read_creates_row_with_overrides(self) -> None:
        updated = update_claim_config(self.db, ClaimConfigUpdate(UserId=False, tokenExpiry="30m"))
        self.assertFalse(updated.include_user_id)
        self.assertTrue(updated.include_username)
        self.assertEqual(updated.token_expiry, "30m")
        self.assertEqual(self.db.query(ClaimConfig).count(), 1)

    def test_explicit_null_is_ignored(self) -> None:
        get_claim_config(self.db)
        patch = ClaimConfigUpdate.model_validate({"Username": None, "tokenExpiry": "7d"})
        updated = update_claim_config(self.db, patch)
        self.assertTrue(updated.include_username)
        self.assertEqual(updated.token_expiry, "7d")

    def test_update_stamps_updated_at(self) -> None:
        before = get_claim_config(self.db).updated_at
        updated = update_claim_config(self.db, ClaimConfigUpdate(Username=False))
        self.assertIsNotNone(updated.updated_at)
        self.assertNotEqual(updated.updated_at, before)


class TestConcurrentFirstAccess(unittest.TestCase):
    """A lost insert race is resolved by re-reading the row the other request created."""

    def test_integrity_error_rereads_existing_row(self) -> None:
        existing = ClaimConfig(
            id=1,
            include_username=True,
            include_email=False,
            include_user_id=True,
            token_expiry="1h",
        )
        session = MagicMock()
        session.get.side_effect = [None, existing]
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        result = get_claim_config(session)

        self.assertIs(result, existing)
        session.rollback.assert_called_once()

    def test_integrity_error_without_row_propagates(self) -> None:
        session = MagicMock()
        session.get.side_effect = [None, None]
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("other failure"))
        with self.assertRaises(IntegrityError):
            get_claim_config(session)


if __name__ == "__main__":
    unittest.main()
