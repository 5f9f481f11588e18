from __future__ import annotations

import time
import unittest

from ipdr_auth.auth import (
    AccountDeactivated,
    AccountLocked,
    AuthService,
    Conflict,
    InvalidCredentials,
    InvalidToken,
    PasswordHasher,
    TokenService,
    ValidationError,
    WeakPassword,
)
from ipdr_auth.logging import InMemoryAuditLog
from ipdr_auth.storage import InMemoryUserStore

PASSWORD = "Abc12345!"


class AuthServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryUserStore()
        self.audit = InMemoryAuditLog()
        self.tokens = TokenService("access-secret", "refresh-secret")
        self.service = AuthService(self.store, self.audit, self.tokens, hasher=PasswordHasher(rounds=4))

    def register_alice(self, **overrides):
        fields = dict(
            username="alice",
            email="alice@x.com",
            password=PASSWORD,
            first_name="Alice",
            last_name="Liddell",
            ip_address="10.0.0.1",
            location="Pune",
        )
        fields.update(overrides)
        return self.service.register(**fields)

    def test_register_returns_sanitized_user_and_tokens(self) -> None:
        result = self.register_alice()
        payload = result.as_dict()
        self.assertNotIn("passwordHash", payload["user"])
        self.assertEqual(payload["user"]["role"], "user")
        self.assertEqual(payload["user"]["failedLoginAttempts"], 0)
        self.assertFalse(payload["user"]["accountLocked"])
        self.assertTrue(payload["user"]["isActive"])
        self.assertIsNone(payload["user"]["lastLogin"])
        stored = self.store.find_by_username("alice")
        claims = self.tokens.verify(payload["accessToken"], "access")
        self.assertEqual(claims["userId"], stored.id)
        self.assertEqual(claims["username"], stored.username)
        self.assertEqual(claims["email"], stored.email)
        self.assertEqual(claims["role"], stored.role)
        self.assertNotEqual(stored.password_hash, PASSWORD)

    def test_register_records_audit_entry(self) -> None:
        result = self.register_alice()
        entries = self.audit.list_all()
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].action, "register")
        self.assertEqual(entries[0].user_id, result.user.id)
        self.assertTrue(entries[0].success)
        self.assertEqual(entries[0].location, "Pune")

    def test_register_duplicate_username_or_email_conflicts(self) -> None:
        self.register_alice()
        with self.assertRaises(Conflict):
            self.register_alice(email="other@x.com")
        with self.assertRaises(Conflict):
            self.register_alice(username="alice_two")

    def test_register_validates_input(self) -> None:
        with self.assertRaises(ValidationError):
            self.register_alice(first_name="")
        with self.assertRaises(ValidationError):
            self.register_alice(email="not-an-email")
        with self.assertRaises(ValidationError):
            self.register_alice(username="al")
        with self.assertRaises(ValidationError):
            self.register_alice(username="alice-smith")
        self.assertEqual(self.store.list_users(), [])

    def test_register_rejects_weak_password(self) -> None:
        with self.assertRaises(WeakPassword) as ctx:
            self.register_alice(password="abc")
        self.assertIn("Include numbers", ctx.exception.feedback)
        self.register_alice(password="abcdefgh")

    def test_register_rejects_password_the_hasher_cannot_store(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.register_alice(password="Abc12345!\x00")
        self.assertEqual(ctx.exception.message, "Password contains unsupported characters")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertIsNone(self.store.find_by_username("alice"))
        self.assertEqual(self.audit.list_all(), [])

    def test_issued_tokens_use_wall_clock(self) -> None:
        before = int(time.time())
        result = self.register_alice()
        claims = self.tokens.verify(result.tokens.access_token, "access")
        self.assertGreaterEqual(claims["iat"], before - 1)
        self.assertLessEqual(claims["iat"], int(time.time()) + 1)
        self.assertEqual(self.service.me(self.service.refresh(result.tokens.refresh_token)).id, result.user.id)

    def test_login_success_resets_failures(self) -> None:
        self.register_alice()
        for _ in range(3):
            with self.assertRaises(InvalidCredentials):
                self.service.login("alice", "wrong")
        self.assertEqual(self.store.find_by_username("alice").failed_login_attempts, 3)
        result = self.service.login("alice", PASSWORD)
        stored = self.store.find_by_username("alice")
        self.assertEqual(stored.failed_login_attempts, 0)
        self.assertIsNotNone(stored.last_login)
        self.assertEqual(result.user.last_login, stored.last_login)
        self.assertTrue(self.audit.list_all()[-1].success)

    def test_unknown_user_is_audited(self) -> None:
        with self.assertRaises(InvalidCredentials):
            self.service.login("ghost", PASSWORD, ip_address="10.0.0.9")
        entry = self.audit.list_all()[-1]
        self.assertEqual(entry.user_id, "unknown")
        self.assertFalse(entry.success)
        self.assertEqual(entry.reason, "User not found")
        self.assertIsNone(entry.failed_attempts)

    def test_wrong_password_and_unknown_user_look_alike(self) -> None:
        self.register_alice()
        with self.assertRaises(InvalidCredentials) as unknown:
            self.service.login("ghost", PASSWORD)
        with self.assertRaises(InvalidCredentials) as wrong:
            self.service.login("alice", "nope")
        self.assertEqual(unknown.exception.message, wrong.exception.message)
        self.assertEqual(self.audit.list_all()[-1].reason, "Invalid password")
        self.assertEqual(self.audit.list_all()[-1].failed_attempts, 1)

    def test_lockout_after_five_failures(self) -> None:
        self.register_alice()
        for attempt in range(1, 6):
            with self.assertRaises(InvalidCredentials):
                self.service.login("alice", "wrong")
            self.assertEqual(self.audit.list_all()[-1].failed_attempts, attempt)
        self.assertTrue(self.store.find_by_username("alice").account_locked)
        with self.assertRaises(AccountLocked):
            self.service.login("alice", PASSWORD)
        self.assertEqual(self.store.find_by_username("alice").failed_login_attempts, 5)

    def test_deactivated_account_rejected(self) -> None:
        result = self.register_alice()
        user = self.store.find_by_id(result.user.id)
        user.is_active = False
        self.store.update(user)
        with self.assertRaises(AccountDeactivated):
            self.service.login("alice", PASSWORD)
        with self.assertRaises(InvalidToken):
            self.service.me(result.tokens.access_token)
        with self.assertRaises(InvalidToken):
            self.service.refresh(result.tokens.refresh_token)

    def test_login_requires_fields(self) -> None:
        with self.assertRaises(ValidationError):
            self.service.login("", PASSWORD)
        with self.assertRaises(ValidationError):
            self.service.login("alice", None)
        self.assertEqual(self.audit.list_all(), [])

    def test_refresh_and_me(self) -> None:
        result = self.register_alice()
        access_token = self.service.refresh(result.tokens.refresh_token)
        self.assertEqual(self.service.me(access_token).username, "alice")
        with self.assertRaises(InvalidToken):
            self.service.refresh(result.tokens.access_token)
        with self.assertRaises(InvalidToken):
            self.service.refresh(None)
        with self.assertRaises(InvalidToken):
            self.service.me(None)

    def test_logout_is_stateless(self) -> None:
        result = self.register_alice()
        self.assertEqual(self.service.logout(result.tokens.refresh_token), "Logout successful")
        self.assertEqual(self.audit.list_all()[-1].action, "logout")
        self.assertIsNotNone(self.service.refresh(result.tokens.refresh_token))
        count = len(self.audit.list_all())
        self.assertEqual(self.service.logout("garbage"), "Logout successful")
        self.assertEqual(self.service.logout(), "Logout successful")
        self.assertEqual(len(self.audit.list_all()), count)

    def test_logs_returns_everything_in_order(self) -> None:
        self.register_alice()
        with self.assertRaises(InvalidCredentials):
            self.service.login("alice", "wrong")
        self.service.login("alice", PASSWORD)
        actions = [(entry.action, entry.success) for entry in self.service.logs()]
        self.assertEqual(actions, [("register", True), ("login", False), ("login", True)])


if __name__ == "__main__":
    unittest.main()
