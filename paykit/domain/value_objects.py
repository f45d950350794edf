"""Domain value objects for Paykit.

Value Objects in DDD:
- Immutable (frozen dataclasses)
- No identity (equality based on attributes)
- Constructed on demand from call inputs or parsed storage responses
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# z-base-32 alphabet used by Pubky for public key strings
Z32_ALPHABET = "ybndrfg8ejkmcpqxot1uwisza345h769"
_Z32_INDEX = {char: index for index, char in enumerate(Z32_ALPHABET)}

PUBLIC_KEY_BYTES = 32
PUBLIC_KEY_Z32_LENGTH = 52  # ceil(256 / 5)


def z32_encode(raw: bytes) -> str:
    """Encode bytes as z-base-32 (no padding)."""
    bits = int.from_bytes(raw, "big")
    total_bits = len(raw) * 8
    length = -(-total_bits // 5)
    # Left-align the bit string on a 5-bit boundary
    bits <<= length * 5 - total_bits
    chars = []
    for shift in range((length - 1) * 5, -1, -5):
        chars.append(Z32_ALPHABET[(bits >> shift) & 0x1F])
    return "".join(chars)


def z32_decode(text: str, num_bytes: int) -> bytes:
    """Decode a z-base-32 string into exactly ``num_bytes`` bytes.

    Raises:
        ValueError: On characters outside the alphabet, wrong length or
            non-zero padding bits.
    """
    expected_length = -(-num_bytes * 8 // 5)
    if len(text) != expected_length:
        raise ValueError(f"expected {expected_length} characters, got {len(text)}")

    bits = 0
    for char in text:
        try:
            bits = (bits << 5) | _Z32_INDEX[char]
        except KeyError:
            raise ValueError(f"invalid z-base-32 character {char!r}") from None

    padding = expected_length * 5 - num_bytes * 8
    if bits & ((1 << padding) - 1):
        raise ValueError("non-zero padding bits")
    return (bits >> padding).to_bytes(num_bytes, "big")


@dataclass(frozen=True)
class MethodId:
    """Identifier for a payment method specification (e.g. ``lightning``).

    Stored as the filename component under ``/pub/paykit.app/v0/``, so it must
    be a single non-empty path segment.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValueError(f"MethodId must be a string, got {type(self.value).__name__}")
        if not self.value:
            raise ValueError("MethodId cannot be empty")
        if "/" in self.value:
            raise ValueError(f"MethodId must be a single path segment, got {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: MethodId | str) -> MethodId:
        return value if isinstance(value, cls) else cls(value)


@dataclass(frozen=True)
class EndpointData:
    """Serialized payload served by a payment endpoint.

    UTF-8 text such as JSON or an lnurl. Binary payloads must be encoded
    (e.g. base64) before wrapping.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValueError(f"EndpointData must be text, got {type(self.value).__name__}")

    def __str__(self) -> str:
        return self.value

    def encode(self) -> bytes:
        """Get the payload as UTF-8 bytes for the wire."""
        return self.value.encode("utf-8")

    @classmethod
    def coerce(cls, value: EndpointData | str) -> EndpointData:
        return value if isinstance(value, cls) else cls(value)


@dataclass(frozen=True)
class PublicKey:
    """Ed25519 public key of a Pubky participant.

    The string form is the 52-character z-base-32 encoding of the 32 key bytes.
    Used both as "whose data" and as contact identity.

    Only the encoding is validated: any 32 bytes are accepted, including
    ones that do not decode to a point on the Ed25519 curve. Keys are never
    used for signature checks here; the homeserver rejects unusable ones.
    """

    z32: str

    def __post_init__(self) -> None:
        try:
            z32_decode(self.z32, PUBLIC_KEY_BYTES)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid public key {self.z32!r}: {e}") from e

    def __str__(self) -> str:
        return self.z32

    @classmethod
    def from_str(cls, text: str) -> PublicKey:
        """Parse a public key from its z-base-32 string form."""
        return cls(text)

    @classmethod
    def from_bytes(cls, raw: bytes) -> PublicKey:
        """Build a public key from its 32 raw bytes."""
        if len(raw) != PUBLIC_KEY_BYTES:
            raise ValueError(f"Public key must be {PUBLIC_KEY_BYTES} bytes, got {len(raw)}")
        return cls(z32_encode(bytes(raw)))

    @classmethod
    def coerce(cls, value: PublicKey | str) -> PublicKey:
        return value if isinstance(value, cls) else cls.from_str(value)

    def to_bytes(self) -> bytes:
        return z32_decode(self.z32, PUBLIC_KEY_BYTES)


@dataclass(frozen=True)
class SupportedPayments:
    """Collection of supported payment entries keyed by method identifier.

    Represents everything a payee currently publishes. Built fresh on every
    query and never cached. Iteration order carries no meaning.
    """

    entries: Mapping[MethodId, EndpointData] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate the result in place
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[MethodId]:
        return iter(self.entries)

    def __contains__(self, method: object) -> bool:
        if isinstance(method, str):
            return any(key.value == method for key in self.entries)
        return method in self.entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SupportedPayments):
            return NotImplemented
        return dict(self.entries) == dict(other.entries)

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def __repr__(self) -> str:
        return f"SupportedPayments(entries={dict(self.entries)!r})"

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def get(self, method: MethodId | str) -> EndpointData | None:
        return self.entries.get(MethodId.coerce(method))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain ``{method: payload}`` dictionary."""
        return {method.value: data.value for method, data in self.entries.items()}
