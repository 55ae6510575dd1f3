"""Tests for iacp.services.authorization: CRUD, idempotent bindings, cascades and two-hop resolution."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import IntegrityError

from iacp.models import AppRole, Application, Role, UserApplication
from iacp.services import authorization, users
from iacp.services.errors import ConflictError, NotFoundError
from tests.support import DatabaseTestCase


class GraphTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = users.register(self.db, "alice", "alice@example.com", "+15550001", "secret123")
        self.app_a = authorization.create_application(self.db, "alpha")
        self.app_b = authorization.create_application(self.db, "beta")
        self.role_x = authorization.create_role(self.db, "x-admin")
        self.role_y = authorization.create_role(self.db, "y-viewer")


class TestRolesAndApplications(GraphTestCase):
    def test_role_names_unique(self) -> None:
        with self.assertRaises(ConflictError) as ctx:
            authorization.create_role(self.db, "x-admin")
        self.assertEqual(ctx.exception.message, authorization.ROLE_EXISTS_MESSAGE)

    def test_app_names_unique(self) -> None:
        with self.assertRaises(ConflictError):
            authorization.create_application(self.db, "alpha")

    def test_lists_ordered_by_name(self) -> None:
        authorization.create_role(self.db, "a-first")
        self.assertEqual(
            [r.role_name for r in authorization.list_roles(self.db)],
            ["a-first", "x-admin", "y-viewer"],
        )
        self.assertEqual([a.app_name for a in authorization.list_applications(self.db)], ["alpha", "beta"])

    def test_rename_role_to_taken_name_conflicts(self) -> None:
        with self.assertRaises(ConflictError):
            authorization.update_role(self.db, self.role_x.id, "y-viewer")

    def test_rename_role_to_own_name_is_allowed(self) -> None:
        role = authorization.update_role(self.db, self.role_x.id, "x-admin")
        self.assertEqual(role.role_name, "x-admin")

    def test_rename_application(self) -> None:
        app = authorization.update_application(self.db, self.app_a.id, "alpha-2")
        self.assertEqual(app.app_name, "alpha-2")

    def test_missing_ids(self) -> None:
        with self.assertRaises(NotFoundError):
            authorization.require_role(self.db, 999)
        with self.assertRaises(NotFoundError):
            authorization.delete_application(self.db, 999)
        with self.assertRaises(NotFoundError):
            authorization.update_role(self.db, 999, "nope")


class TestAssignments(GraphTestCase):
    def test_assign_role_twice_yields_one_row(self) -> None:
        first = authorization.assign_role_to_app(self.db, self.app_a.id, self.role_x.id)
        second = authorization.assign_role_to_app(self.db, self.app_a.id, self.role_x.id)
        self.assertEqual(first.id, second.id)
        self.assertEqual(self.db.query(AppRole).count(), 1)

    def test_assign_user_twice_yields_one_row(self) -> None:
        first = authorization.assign_user_to_app(self.db, self.app_a.id, self.user.id)
        second = authorization.assign_user_to_app(self.db, self.app_a.id, self.user.id)
        self.assertEqual(first.id, second.id)
        self.assertEqual(self.db.query(UserApplication).count(), 1)

    def test_assign_requires_existing_parents(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            authorization.assign_role_to_app(self.db, 999, self.role_x.id)
        self.assertEqual(ctx.exception.message, "Application not found")
        with self.assertRaises(NotFoundError) as ctx:
            authorization.assign_role_to_app(self.db, self.app_a.id, 999)
        self.assertEqual(ctx.exception.message, "Role not found")
        with self.assertRaises(NotFoundError) as ctx:
            authorization.assign_user_to_app(self.db, self.app_a.id, 999)
        self.assertEqual(ctx.exception.message, "User not found")

    def test_unassign_missing_pair_returns_false(self) -> None:
        self.assertFalse(authorization.unassign_role_from_app(self.db, self.app_a.id, self.role_x.id))
        self.assertFalse(authorization.unassign_user_from_app(self.db, self.app_a.id, self.user.id))

    def test_unassign_existing_pair(self) -> None:
        authorization.assign_role_to_app(self.db, self.app_a.id, self.role_x.id)
        self.assertTrue(authorization.unassign_role_from_app(self.db, self.app_a.id, self.role_x.id))
        self.assertEqual(authorization.roles_for_app(self.db, self.app_a.id), [])

    def test_binding_rows_carry_names(self) -> None:
        authorization.assign_role_to_app(self.db, self.app_a.id, self.role_x.id)
        authorization.assign_user_to_app(self.db, self.app_a.id, self.user.id)
        (app_role,) = authorization.list_app_roles(self.db, self.app_a.id)
        self.assertEqual((app_role.app_name, app_role.role_name), ("alpha", "x-admin"))
        (user_app,) = authorization.list_user_applications(self.db)
        self.assertEqual((user_app.username, user_app.email, user_app.app_name), ("alice", "alice@example.com", "alpha"))

    def test_one_hop_traversals(self) -> None:
        authorization.assign_role_to_app(self.db, self.app_a.id, self.role_x.id)
        authorization.assign_role_to_app(self.db, self.app_b.id, self.role_x.id)
        authorization.assign_user_to_app(self.db, self.app_b.id, self.user.id)
        self.assertEqual([r.id for r in authorization.roles_for_app(self.db, self.app_a.id)], [self.role_x.id])
        self.assertEqual(
            [a.id for a in authorization.apps_for_role(self.db, self.role_x.id)],
            [self.app_a.id, self.app_b.id],
        )
        self.assertEqual([u.id for u in authorization.users_for_app(self.db, self.app_b.id)], [self.user.id])
        self.assertEqual([a.id for a in authorization.apps_for_user(self.db, self.user.id)], [self.app_b.id])


class TestCascades(GraphTestCase):
    def test_deleting_application_removes_all_its_bindings(self) -> None:
        authorization.assign_role_to_app(self.db, self.app_a.id, self.role_x.id)
        authorization.assign_role_to_app(self.db, self.app_b.id, self.role_x.id)
        authorization.assign_user_to_app(self.db, self.app_a.id, self.user.id)

        app_id = self.app_a.id
        authorization.delete_application(self.db, app_id)

        self.assertEqual(self.db.query(AppRole).filter(AppRole.app_id == app_id).count(), 0)
        self.assertEqual(self.db.query(UserApplication).count(), 0)
        self.assertEqual(self.db.query(AppRole).count(), 1)
        self.assertIsNotNone(self.db.get(Role, self.role_x.id))

    def test_deleting_role_removes_its_bindings(self) -> None:
        authorization.assign_role_to_app(self.db, self.app_a.id, self.role_x.id)
        authorization.assign_role_to_app(self.db, self.app_a.id, self.role_y.id)

        authorization.delete_role(self.db, self.role_x.id)

        self.assertEqual([r.role_name for r in authorization.roles_for_app(self.db, self.app_a.id)], ["y-viewer"])
        self.assertIsNotNone(self.db.get(Application, self.app_a.id))


class TestApplicationsAndRolesForUser(GraphTestCase):
    def test_nested_shape_and_order(self) -> None:
        authorization.assign_user_to_app(self.db, self.app_a.id, self.user.id)
        authorization.assign_user_to_app(self.db, self.app_b.id, self.user.id)
        authorization.assign_role_to_app(self.db, self.app_a.id, self.role_x.id)

        result = authorization.applications_and_roles_for_user(self.db, self.user.id)

        self.assertEqual(
            [(app.app_name, [r.role_name for r in roles]) for app, roles in result],
            [("alpha", ["x-admin"]), ("beta", [])],
        )

    def test_order_follows_binding_order(self) -> None:
        authorization.assign_user_to_app(self.db, self.app_b.id, self.user.id)
        authorization.assign_user_to_app(self.db, self.app_a.id, self.user.id)
        result = authorization.applications_and_roles_for_user(self.db, self.user.id)
        self.assertEqual([app.app_name for app, _ in result], ["beta", "alpha"])

    def test_user_without_applications(self) -> None:
        self.assertEqual(authorization.applications_and_roles_for_user(self.db, self.user.id), [])


class TestAssignRace(unittest.TestCase):
    """A concurrent insert of the same pair is reported as the existing binding, not an error."""

    @patch("iacp.services.authorization.require_role")
    @patch("iacp.services.authorization.require_application")
    @patch("iacp.services.authorization._find_app_role")
    def test_integrity_error_returns_winner(
        self,
        mock_find: MagicMock,
        _mock_app: MagicMock,
        _mock_role: MagicMock,
    ) -> None:
        winner = AppRole(id=5, app_id=1, role_id=1)
        mock_find.side_effect = [None, winner]
        session = MagicMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        result = authorization.assign_role_to_app(session, 1, 1)

        self.assertIs(result, winner)
        session.rollback.assert_called_once()


if __name__ == "__main__":
    unittest.main()
