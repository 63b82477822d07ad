"""
Tests for fulfilment and condition calculation (PREIMAGE-SHA-256).

Test plan:
- Fulfilment: HMAC-SHA-256 keyed by base64(secret), base64url output
- Condition: SHA-256 of the decoded 32-byte preimage, idempotent
- Verification: matching pairs pass; wrong, short, long or undecodable
  values return False without raising
- Conditions are compared as canonical base64url text only
"""

import base64
import hashlib
import hmac

import pytest

from ilpquote.domain.encoding import b64url_decode, b64url_encode
from ilpquote.domain.errors import InvalidEncoding, InvalidFulfilmentLength
from ilpquote.domain.hashing import (
    PREIMAGE_LENGTH,
    calculate_condition,
    calculate_fulfilment,
    verify_fulfilment,
)


SECRET = b"shared secret"
PACKET = "AQsAAAAAAAAnEAdnLmEuYi5jA2FiYwA"


def _preimage(fill: int = 7) -> bytes:
    return bytes([fill]) * PREIMAGE_LENGTH


class TestFulfilment:
    def test_hmac_keyed_by_base64_secret(self) -> None:
        key = base64.b64encode(SECRET)
        expected = hmac.new(key, PACKET.encode("ascii"), hashlib.sha256).digest()
        fulfilment = calculate_fulfilment(PACKET, SECRET)
        assert b64url_decode(fulfilment) == expected

    def test_is_32_bytes_of_base64url(self) -> None:
        fulfilment = calculate_fulfilment(PACKET, SECRET)
        assert len(fulfilment) == 43
        assert not set(fulfilment) & set("=+/")

    def test_deterministic(self) -> None:
        assert calculate_fulfilment(PACKET, SECRET) == calculate_fulfilment(PACKET, SECRET)

    def test_depends_on_secret_and_packet(self) -> None:
        base = calculate_fulfilment(PACKET, SECRET)
        assert calculate_fulfilment(PACKET, b"other secret") != base
        assert calculate_fulfilment(PACKET + "A", SECRET) != base


class TestCondition:
    def test_sha256_of_preimage(self) -> None:
        preimage = _preimage()
        condition = calculate_condition(b64url_encode(preimage))
        assert b64url_decode(condition) == hashlib.sha256(preimage).digest()

    def test_zero_preimage(self) -> None:
        condition = calculate_condition("A" * 43)
        expected = base64.urlsafe_b64encode(hashlib.sha256(bytes(32)).digest())
        assert condition == expected.decode("ascii").rstrip("=")

    def test_idempotent(self) -> None:
        fulfilment = calculate_fulfilment(PACKET, SECRET)
        assert calculate_condition(fulfilment) == calculate_condition(fulfilment)

    def test_accepts_padded_fulfilment(self) -> None:
        fulfilment = b64url_encode(_preimage())
        assert calculate_condition(fulfilment + "=") == calculate_condition(fulfilment)

    @pytest.mark.parametrize("length", [0, 31, 33, 64])
    def test_rejects_wrong_length(self, length: int) -> None:
        with pytest.raises(InvalidFulfilmentLength) as exc_info:
            calculate_condition(b64url_encode(b"\x01" * length))
        assert exc_info.value.length == length

    def test_rejects_undecodable(self) -> None:
        with pytest.raises(InvalidEncoding):
            calculate_condition("A" * 41)


class TestVerify:
    def test_matching_pair(self) -> None:
        fulfilment = calculate_fulfilment(PACKET, SECRET)
        assert verify_fulfilment(fulfilment, calculate_condition(fulfilment))

    @pytest.mark.parametrize("index", [0, 15, 31])
    def test_flipped_byte(self, index: int) -> None:
        preimage = bytearray(_preimage())
        condition = calculate_condition(b64url_encode(bytes(preimage)))
        preimage[index] ^= 0x01
        assert not verify_fulfilment(b64url_encode(bytes(preimage)), condition)

    @pytest.mark.parametrize("fulfilment", ["", b64url_encode(b"\x07" * 31), b64url_encode(b"\x07" * 33)])
    def test_wrong_length_is_false(self, fulfilment: str) -> None:
        condition = calculate_condition(b64url_encode(_preimage()))
        assert verify_fulfilment(fulfilment, condition) is False

    @pytest.mark.parametrize("bad", ["A" * 41, "é", None])
    def test_undecodable_is_false(self, bad) -> None:
        fulfilment = b64url_encode(_preimage())
        condition = calculate_condition(fulfilment)
        assert verify_fulfilment(bad, condition) is False
        assert verify_fulfilment(fulfilment, bad) is False


class TestCanonicalCondition:
    """Only the exact unpadded base64url condition text is accepted."""

    @staticmethod
    def _pair() -> tuple[str, str]:
        fulfilment = b64url_encode(_preimage())
        return fulfilment, calculate_condition(fulfilment)

    def test_padded_condition(self) -> None:
        fulfilment, condition = self._pair()
        assert verify_fulfilment(fulfilment, condition + "=") is False

    def test_unused_trailing_bits(self) -> None:
        fulfilment, condition = self._pair()
        # the last character of a 32-byte value carries 2 unused bits
        alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
        flipped = alphabet[alphabet.index(condition[-1]) ^ 1]
        tampered = condition[:-1] + flipped
        assert verify_fulfilment(fulfilment, tampered) is False

    def test_junk_characters(self) -> None:
        fulfilment, condition = self._pair()
        assert verify_fulfilment(fulfilment, condition[:5] + "!*" + condition[5:]) is False

    def test_standard_alphabet(self) -> None:
        fill = next(
            f for f in range(256)
            if set(base64.b64encode(hashlib.sha256(_preimage(f)).digest()).decode("ascii")) & set("+/")
        )
        fulfilment = b64url_encode(_preimage(fill))
        digest = hashlib.sha256(_preimage(fill)).digest()
        standard = base64.b64encode(digest).decode("ascii")
        assert verify_fulfilment(fulfilment, standard) is False
        assert verify_fulfilment(fulfilment, standard.rstrip("=")) is False
        assert verify_fulfilment(fulfilment, calculate_condition(fulfilment)) is True
