import pytest

from modules.auth.exceptions import HashingError, MalformedHashError
from modules.auth.password import PasswordHasher


class TestPasswordHasher:
    def test_hash_then_verify(self, hasher):
        """Original plaintext should verify against its hash."""
        password_hash = hasher.hash("abcdef")
        assert hasher.verify("abcdef", password_hash) is True

    def test_verify_wrong_password(self, hasher):
        """A different plaintext should return False, not raise."""
        password_hash = hasher.hash("abcdef")
        assert hasher.verify("abcdeg", password_hash) is False
        assert hasher.verify("", password_hash) is False

    def test_hash_is_not_plaintext(self, hasher):
        password_hash = hasher.hash("abcdef")
        assert "abcdef" not in password_hash

    def test_salt_differs_per_hash(self, hasher):
        """Two hashes of the same password should differ but both verify."""
        first = hasher.hash("abcdef")
        second = hasher.hash("abcdef")
        assert first != second
        assert len(first) == len(second)
        assert hasher.verify("abcdef", first)
        assert hasher.verify("abcdef", second)

    def test_cost_factor_embedded(self, hasher):
        """The cost factor should be recorded in the hash."""
        assert hasher.hash("abcdef").startswith("$2b$04$")
        assert hasher.rounds == 4

    def test_unicode_password(self, hasher):
        password_hash = hasher.hash("pässwörd-密码")
        assert hasher.verify("pässwörd-密码", password_hash)
        assert not hasher.verify("passwörd-密码", password_hash)

    @pytest.mark.parametrize("rounds", [0, 3, 32, -1, "12", 12.0, True])
    def test_invalid_cost_factor(self, rounds):
        """Cost factor must be an int in bcrypt's accepted range."""
        with pytest.raises(HashingError):
            PasswordHasher(rounds=rounds)

    @pytest.mark.parametrize("rounds", [4, 10, 31])
    def test_valid_cost_factor_bounds(self, rounds):
        assert PasswordHasher(rounds=rounds).rounds == rounds

    @pytest.mark.parametrize("stored", ["", "not-a-hash", "$2b$04$short"])
    def test_malformed_stored_hash(self, hasher, stored):
        """A hash this hasher could not have produced should raise."""
        with pytest.raises(MalformedHashError):
            hasher.verify("abcdef", stored)

    def test_malformed_hash_is_hashing_error(self):
        assert isinstance(MalformedHashError(), HashingError)

    def test_overlong_candidate_never_matches(self, hasher):
        """Inputs past bcrypt's 72-byte limit are rejected without raising."""
        password_hash = hasher.hash("a" * 72)
        assert hasher.verify("a" * 73, password_hash) is False

    @pytest.mark.asyncio
    async def test_async_variants(self, hasher):
        """Worker-thread variants should behave like the sync ones."""
        password_hash = await hasher.hash_async("abcdef")
        assert await hasher.verify_async("abcdef", password_hash) is True
        assert await hasher.verify_async("wrong1", password_hash) is False

    @pytest.mark.asyncio
    async def test_dummy_verification_never_matches(self, hasher):
        assert await hasher.verify_dummy_async("abcdef") is False

    def test_dummy_hash_is_cached(self, hasher):
        assert hasher.dummy_hash is hasher.dummy_hash
