import unittest

from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.exceptions import ApplicationError
from apps.auth.identity import (
    Identity,
    bearer_token,
    identity_from_token,
    issue_access_token,
    require_admin,
    require_authenticated,
)


class IdentityGateTests(unittest.TestCase):
    def setUp(self):
        self.admin = Identity(id=1, username="admin", role="admin")
        self.customer = Identity(id=2, username="pasiego", role="usuario")

    def test_require_authenticated(self):
        self.assertIs(require_authenticated(self.customer), self.customer)
        with self.assertRaises(ApplicationError) as ctx:
            require_authenticated(None)
        self.assertEqual(ctx.exception.code, "UNAUTHENTICATED")

    def test_require_admin(self):
        self.assertIs(require_admin(self.admin), self.admin)
        with self.assertRaises(ApplicationError) as ctx:
            require_admin(self.customer)
        self.assertEqual(ctx.exception.code, "FORBIDDEN")
        with self.assertRaises(ApplicationError) as ctx:
            require_admin(None)
        self.assertEqual(ctx.exception.code, "UNAUTHENTICATED")

    def test_token_round_trip_keeps_claims(self):
        token = issue_access_token(self.admin)
        self.assertEqual(identity_from_token(token), self.admin)

    def test_garbage_token_is_rejected(self):
        with self.assertRaises(InvalidToken):
            identity_from_token("not-a-token")

    def test_missing_user_claim_is_rejected(self):
        with self.assertRaises(InvalidToken):
            Identity.from_claims({"username": "x", "role": "admin"})

    def test_missing_role_claim_defaults_to_regular_user(self):
        identity = Identity.from_claims({"user_id": "5", "username": "x"})
        self.assertEqual(identity.id, 5)
        self.assertFalse(identity.is_admin)

    def test_bearer_token_parsing(self):
        self.assertEqual(bearer_token("Bearer abc"), "abc")
        self.assertIsNone(bearer_token("Token abc"))
        self.assertIsNone(bearer_token("Bearer"))
        self.assertIsNone(bearer_token(None))
