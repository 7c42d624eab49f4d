"""Tests for hashed, single-use password reset tokens."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from modules.auth.password_reset import (
    PasswordResetRepository,
    generate_reset_token,
    hash_reset_token,
)
from shared.repository import utc_now

EMAIL = "reader@example.com"


@pytest.fixture
def resets(fake_db) -> PasswordResetRepository:
    return PasswordResetRepository(fake_db)


@pytest.fixture
def token(resets) -> str:
    token = generate_reset_token()
    resets.create(EMAIL, hash_reset_token(token), ttl=timedelta(hours=1))
    return token


class TestTokens:
    def test_token_is_random_hex(self):
        first, second = generate_reset_token(), generate_reset_token()
        assert first != second
        assert len(first) == 64
        int(first, 16)

    def test_hash_is_sha256_hex(self):
        digest = hash_reset_token("abc")
        assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    def test_only_hash_is_stored(self, fake_db, token):
        (row,) = fake_db.rows("password_reset_tokens")
        assert row["token_hash"] == hash_reset_token(token)
        assert token not in row.values()
        assert row["used"] is False


class TestConsume:
    def test_consumes_once(self, resets, token):
        assert resets.consume(EMAIL, hash_reset_token(token)) is True
        assert resets.consume(EMAIL, hash_reset_token(token)) is False

    def test_marks_used(self, fake_db, resets, token):
        resets.consume(EMAIL, hash_reset_token(token))
        (row,) = fake_db.rows("password_reset_tokens")
        assert row["used"] is True
        assert row["used_at"] is not None

    def test_wrong_email(self, resets, token):
        assert resets.consume("other@example.com", hash_reset_token(token)) is False
        assert resets.consume(EMAIL, hash_reset_token(token)) is True

    def test_unknown_token(self, resets, token):
        assert resets.consume(EMAIL, hash_reset_token("not-issued")) is False

    def test_expired(self, resets):
        token = generate_reset_token()
        issued = utc_now() - timedelta(hours=2)
        resets.create(EMAIL, hash_reset_token(token), ttl=timedelta(hours=1), now=issued)
        assert resets.consume(EMAIL, hash_reset_token(token)) is False

    def test_concurrent_threads_single_winner(self, resets, token):
        token_hash = hash_reset_token(token)
        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(lambda _: resets.consume(EMAIL, token_hash), range(16)))
        assert outcomes.count(True) == 1

    @pytest.mark.asyncio
    async def test_concurrent_tasks_single_winner(self, resets, token):
        token_hash = hash_reset_token(token)
        outcomes = await asyncio.gather(
            *(asyncio.to_thread(resets.consume, EMAIL, token_hash) for _ in range(10))
        )
        assert sum(outcomes) == 1
