"""Tests for Paykit domain value objects.

Tests cover:
- Validation constraints of MethodId, EndpointData and PublicKey
- z-base-32 encoding of public keys (Hypothesis)
- SupportedPayments collection behaviour
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from paykit.domain.value_objects import (
    Z32_ALPHABET,
    EndpointData,
    MethodId,
    PublicKey,
    SupportedPayments,
    z32_decode,
    z32_encode,
)

pytestmark = pytest.mark.unit

# Well-known test key (all zero bytes)
ZERO_KEY_Z32 = "y" * 52


# ============================================================================
# METHOD ID
# ============================================================================


class TestMethodId:
    def test_value_and_str(self):
        method = MethodId("lightning")

        assert method.value == "lightning"
        assert str(method) == "lightning"

    def test_equality_and_hash_by_value(self):
        assert MethodId("onchain") == MethodId("onchain")
        assert len({MethodId("onchain"), MethodId("onchain"), MethodId("lightning")}) == 2

    @pytest.mark.parametrize("value", ["", "a/b", "/", "lightning/"])
    def test_rejects_invalid_path_segment(self, value):
        with pytest.raises(ValueError):
            MethodId(value)

    def test_coerce(self):
        method = MethodId("bolt11")

        assert MethodId.coerce(method) is method
        assert MethodId.coerce("bolt11") == method


# ============================================================================
# ENDPOINT DATA
# ============================================================================


class TestEndpointData:
    def test_encode_is_utf8(self):
        data = EndpointData('{"memo":"café"}')

        assert data.encode() == '{"memo":"café"}'.encode()

    def test_empty_payload_is_allowed(self):
        assert EndpointData("").value == ""

    def test_rejects_bytes(self):
        with pytest.raises(ValueError, match="must be text"):
            EndpointData(b"raw")  # type: ignore[arg-type]


# ============================================================================
# PUBLIC KEY
# ============================================================================


class TestPublicKey:
    def test_zero_key(self):
        key = PublicKey.from_bytes(bytes(32))

        assert str(key) == ZERO_KEY_Z32
        assert key.to_bytes() == bytes(32)

    def test_from_str_matches_constructor(self):
        assert PublicKey.from_str(ZERO_KEY_Z32) == PublicKey(ZERO_KEY_Z32)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "y" * 51,
            "y" * 53,
            "0" * 52,  # '0' is not in the alphabet
            "Y" * 52,  # alphabet is lower-case only
            "y" * 51 + "b",  # non-zero padding bits
        ],
    )
    def test_rejects_malformed_strings(self, text):
        with pytest.raises(ValueError, match="Invalid public key"):
            PublicKey.from_str(text)

    def test_from_bytes_rejects_wrong_length(self):
        with pytest.raises(ValueError, match="32 bytes"):
            PublicKey.from_bytes(b"\x01" * 31)

    def test_coerce_parses_strings(self):
        key = PublicKey.from_bytes(b"\x07" * 32)

        assert PublicKey.coerce(str(key)) == key
        assert PublicKey.coerce(key) is key

    @given(raw=st.binary(min_size=32, max_size=32))
    def test_string_form_round_trips(self, raw):
        key = PublicKey.from_bytes(raw)

        assert len(str(key)) == 52
        assert set(str(key)) <= set(Z32_ALPHABET)
        assert PublicKey.from_str(str(key)) == key
        assert key.to_bytes() == raw


class TestZ32:
    def test_known_vector(self):
        # 0xF0 -> bits 11110 000(00) -> "6" "y"
        assert z32_encode(b"\xf0") == Z32_ALPHABET[0b11110] + Z32_ALPHABET[0]

    def test_decode_rejects_wrong_length(self):
        with pytest.raises(ValueError, match="expected 2 characters"):
            z32_decode("yyy", 1)


# ============================================================================
# SUPPORTED PAYMENTS
# ============================================================================


class TestSupportedPayments:
    def test_empty_by_default(self):
        payments = SupportedPayments()

        assert payments.is_empty
        assert len(payments) == 0
        assert payments.to_dict() == {}

    def test_lookup_and_membership(self):
        payments = SupportedPayments(
            entries={MethodId("lightning"): EndpointData('{"bolt11":"ln..."}')}
        )

        assert MethodId("lightning") in payments
        assert "lightning" in payments
        assert "onchain" not in payments
        assert payments.get("lightning") == EndpointData('{"bolt11":"ln..."}')
        assert payments.get(MethodId("onchain")) is None
        assert list(payments) == [MethodId("lightning")]

    def test_equality_ignores_insertion_order(self):
        a = SupportedPayments(
            entries={MethodId("a"): EndpointData("1"), MethodId("b"): EndpointData("2")}
        )
        b = SupportedPayments(
            entries={MethodId("b"): EndpointData("2"), MethodId("a"): EndpointData("1")}
        )

        assert a == b
        assert hash(a) == hash(b)

    def test_entries_cannot_be_mutated(self):
        source = {MethodId("a"): EndpointData("1")}
        payments = SupportedPayments(entries=source)

        source[MethodId("b")] = EndpointData("2")

        assert len(payments) == 1
        with pytest.raises(TypeError):
            payments.entries[MethodId("c")] = EndpointData("3")  # type: ignore[index]

    def test_to_dict(self):
        payments = SupportedPayments(entries={MethodId("onchain"): EndpointData("bc1")})

        assert payments.to_dict() == {"onchain": "bc1"}
