# -*- coding: utf-8 -*-

from __future__ import annotations

import hashlib
import time
import unittest
from unittest import mock

from fastapi import HTTPException

from glucowise.auth import security
from glucowise.auth.security import hash_password, issue_token, needs_rehash, read_token, verify_password


class TestPasswords(unittest.TestCase):
    def test_hash_round_trip(self) -> None:
        stored = hash_password("correct horse")
        self.assertTrue(stored.startswith("pbkdf2_sha256$200000$"))
        self.assertTrue(verify_password("correct horse", stored))
        self.assertFalse(verify_password("wrong horse", stored))
        self.assertFalse(needs_rehash(stored))

    def test_malformed_hashes_never_verify(self) -> None:
        for stored in ("", "plain", "md5$1$a$b", "pbkdf2_sha256$x$a$b", "pbkdf2_nosuchalg$1000$c2FsdA$ZGs"):
            self.assertFalse(verify_password("secret", stored), stored)
            self.assertTrue(needs_rehash(stored), stored)

    def test_older_iteration_count_needs_rehash(self) -> None:
        salt = b"0123456789abcdef"
        digest = hashlib.pbkdf2_hmac("sha256", b"secret", salt, 1000)
        stored = "$".join(("pbkdf2_sha256", "1000", security._b64(salt), security._b64(digest)))
        self.assertTrue(verify_password("secret", stored))
        self.assertTrue(needs_rehash(stored))


class TestTokens(unittest.TestCase):
    user = {"id": "user-1", "email": "jane@example.com"}

    def test_issue_and_read(self) -> None:
        claims = read_token(issue_token(self.user))
        self.assertEqual(claims.sub, "user-1")
        self.assertEqual(claims.email, "jane@example.com")
        self.assertGreater(claims.exp, claims.iat)

    def test_tampered_token_is_rejected(self) -> None:
        head, body, sig = issue_token(self.user).split(".")
        other_body = issue_token({"id": "user-2", "email": "x@example.com"}).split(".")[1]
        for token in (f"{head}.{other_body}.{sig}", f"{head}.{body}", "not.a.token", "a.b.c.d", "ünicode.x.y"):
            with self.assertRaises(HTTPException) as ctx:
                read_token(token)
            self.assertEqual(ctx.exception.status_code, 401, token)

    def test_expired_token(self) -> None:
        token = issue_token(self.user)
        later = time.time() + 400 * 86400
        with mock.patch.object(security.time, "time", return_value=later):
            with self.assertRaises(HTTPException) as ctx:
                read_token(token)
        self.assertEqual(ctx.exception.detail, "Token expired")


if __name__ == "__main__":
    unittest.main()
