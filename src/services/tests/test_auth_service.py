"""Unit tests for auth_service: registration, login and token authentication."""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import (
    DuplicateError,
    InternalError,
    RepositoryError,
    TokenExpiredError,
    TokenInvalidError,
    UnauthorizedError,
    ValidationError,
    ValidationReason,
)
from domain.model.user import Credentials, PublicUser, RegistrationInput
from services.auth_service import authenticate, login, register
from services.password import verify_password
from utils.config import AuthConfig

CONFIG = AuthConfig(jwt_secret_key='test-secret', bcrypt_rounds=4)


def _input(**overrides) -> RegistrationInput:
    values = dict(
        first_name='JOE',
        last_name='DOE',
        email='JOE@X.COM',
        birth_date='1990-05-01',
        password='abc12345',
        password_confirm='abc12345',
    )
    values.update(overrides)
    return RegistrationInput(**values)


class TestRegister(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_register_normalizes_and_returns_public_user(self):
        user = register(self.repo, CONFIG, _input())

        self.assertIsInstance(user, PublicUser)
        self.assertTrue(user.id)
        self.assertEqual(len(user.id), 21)
        self.assertEqual(user.first_name, 'Joe')
        self.assertEqual(user.last_name, 'Doe')
        self.assertEqual(user.email, 'joe@x.com')
        self.assertEqual(user.birth_date.isoformat(), '1990-05-01')
        self.assertIsNotNone(user.created_at)
        self.assertEqual(user.created_at.tzinfo, timezone.utc)
        self.assertFalse(hasattr(user, 'password_hash'))

    def test_register_persists_verifiable_hash(self):
        user = register(self.repo, CONFIG, _input())

        stored = self.repo.get_by_email('joe@x.com')
        self.assertIsNotNone(stored)
        self.assertEqual(stored.id, user.id)
        self.assertNotEqual(stored.password_hash, 'abc12345')
        self.assertTrue(verify_password('abc12345', stored.password_hash))

    def test_register_uses_configured_cost(self):
        register(self.repo, CONFIG, _input())
        stored = self.repo.get_by_email('joe@x.com')
        self.assertIn('$04$', stored.password_hash)

    def test_each_registration_gets_a_new_id(self):
        first = register(self.repo, CONFIG, _input())
        second = register(self.repo, CONFIG, _input(email='other@x.com'))
        self.assertNotEqual(first.id, second.id)

    def test_confirmation_mismatch_stores_nothing(self):
        with self.assertRaises(ValidationError) as ctx:
            register(self.repo, CONFIG, _input(password_confirm='abc12346'))

        self.assertEqual(ctx.exception.field, 'password')
        self.assertEqual(ctx.exception.reason, ValidationReason.CONFIRMATION_MISMATCH)
        self.assertEqual(self.repo.store, {})

    def test_validation_reports_all_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            register(self.repo, CONFIG, _input(first_name='', email='bad', birth_date='2999-01-01'))

        self.assertEqual(
            ctx.exception.reasons(),
            {
                'first_name': ValidationReason.REQUIRED,
                'email': ValidationReason.INVALID_FORMAT,
                'birth_date': ValidationReason.IN_FUTURE,
            },
        )
        self.assertEqual(self.repo.store, {})

    def test_email_is_validated_after_normalization(self):
        register(self.repo, CONFIG, _input(email='Mixed.Case@Example.ORG'))
        self.assertIsNotNone(self.repo.get_by_email('mixed.case@example.org'))

    def test_duplicate_email_is_rejected(self):
        register(self.repo, CONFIG, _input())

        with self.assertRaises(DuplicateError):
            register(self.repo, CONFIG, _input(email='joe@x.com'))
        self.assertEqual(len(self.repo.store), 1)

    def test_store_failure_is_internal_error(self):
        repo = MagicMock()
        repo.insert.side_effect = RepositoryError("connection reset")

        with self.assertRaises(InternalError) as ctx:
            register(repo, CONFIG, _input())
        self.assertNotIn('connection reset', str(ctx.exception))

    @patch('services.auth_service.generate_id', side_effect=OSError("no entropy"))
    def test_id_generation_failure_is_internal_error(self, _mock_generate_id):
        with self.assertRaises(InternalError):
            register(self.repo, CONFIG, _input())
        self.assertEqual(self.repo.store, {})

    @patch('services.auth_service.hash_password', side_effect=ValueError("bad salt"))
    def test_hash_failure_is_internal_error(self, _mock_hash):
        with self.assertRaises(InternalError):
            register(self.repo, CONFIG, _input())


class TestLogin(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = register(self.repo, CONFIG, _input())

    def test_login_then_verify_returns_same_user(self):
        token = login(self.repo, CONFIG, Credentials('joe@x.com', 'abc12345'))

        self.assertIsInstance(token, str)
        self.assertEqual(authenticate(self.repo, CONFIG, token), self.user.id)

    def test_login_normalizes_email(self):
        token = login(self.repo, CONFIG, Credentials('JOE@X.COM', 'abc12345'))
        self.assertEqual(authenticate(self.repo, CONFIG, token), self.user.id)

    def test_unknown_email_and_wrong_password_are_indistinguishable(self):
        with self.assertRaises(UnauthorizedError) as unknown:
            login(self.repo, CONFIG, Credentials('nobody@x.com', 'abc12345'))
        with self.assertRaises(UnauthorizedError) as wrong:
            login(self.repo, CONFIG, Credentials('joe@x.com', 'wrong-password'))

        self.assertIs(type(unknown.exception), type(wrong.exception))
        self.assertEqual(str(unknown.exception), str(wrong.exception))
        self.assertEqual(unknown.exception.args, wrong.exception.args)

    @patch('services.auth_service.verify_password', return_value=False)
    def test_unknown_email_still_runs_a_password_check(self, mock_verify):
        with self.assertRaises(UnauthorizedError):
            login(self.repo, CONFIG, Credentials('nobody@x.com', 'abc12345'))

        mock_verify.assert_called_once()
        password, password_hash = mock_verify.call_args.args
        self.assertEqual(password, 'abc12345')
        self.assertTrue(password_hash.startswith('$2b$04$'))

    @patch('services.auth_service.verify_password', return_value=False)
    def test_unknown_email_and_wrong_password_do_the_same_work(self, mock_verify):
        with self.assertRaises(UnauthorizedError):
            login(self.repo, CONFIG, Credentials('nobody@x.com', 'abc12345'))
        with self.assertRaises(UnauthorizedError):
            login(self.repo, CONFIG, Credentials('joe@x.com', 'wrong-password'))

        self.assertEqual(mock_verify.call_count, 2)

    def test_password_is_case_sensitive(self):
        with self.assertRaises(UnauthorizedError):
            login(self.repo, CONFIG, Credentials('joe@x.com', 'ABC12345'))

    def test_store_failure_is_unauthorized(self):
        repo = MagicMock()
        repo.get_by_email.side_effect = RepositoryError("timeout")
        with self.assertRaises(UnauthorizedError):
            login(repo, CONFIG, Credentials('joe@x.com', 'abc12345'))


class TestAuthenticate(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = register(self.repo, CONFIG, _input())

    def test_expired_token(self):
        issued = datetime.now(timezone.utc) - timedelta(days=16)
        token = login(self.repo, CONFIG, Credentials('joe@x.com', 'abc12345'), now=issued)

        with self.assertRaises(TokenExpiredError):
            authenticate(self.repo, CONFIG, token)

    def test_token_from_other_key(self):
        other = AuthConfig(jwt_secret_key='other-secret', bcrypt_rounds=4)
        token = login(self.repo, other, Credentials('joe@x.com', 'abc12345'))

        with self.assertRaises(TokenInvalidError):
            authenticate(self.repo, CONFIG, token)

    def test_empty_token(self):
        with self.assertRaises(TokenInvalidError):
            authenticate(self.repo, CONFIG, '')


if __name__ == '__main__':
    unittest.main()
