"""
address.py - Account addresses as they appear in transaction records

Two textual forms are accepted:
    raw:       "<workchain>:<64 hex chars>"
    friendly:  48 base64 chars encoding flags, workchain, hash and a CRC-16

str(address) is the friendly, url-safe, bounceable form. That string is the
key ledgerlens uses to look up labels, so both forms of the same address
resolve to the same label.
"""

from __future__ import annotations
from dataclasses import dataclass
import base64
import binascii
import re
from typing import Any

from .core import AddressParseError


HASH_BYTES = 32
FRIENDLY_LENGTH = 48

# Friendly-form flag bytes.
BOUNCEABLE_TAG = 0x11
NON_BOUNCEABLE_TAG = 0x51
TEST_FLAG = 0x80

_RAW_PATTERN = re.compile(r"^(-?\d+):([0-9a-fA-F]{64})$")


def _crc16(data: bytes) -> bytes:
    """CRC-16/XMODEM, big-endian."""
    return binascii.crc_hqx(data, 0).to_bytes(2, "big")


@dataclass(frozen=True, slots=True)
class Address:
    """
    A well-formed account address.

    Attributes:
        workchain: Signed workchain id (fits in one byte, e.g. 0 or -1).
        hash_part: 32-byte account id.
    """
    workchain: int
    hash_part: bytes

    def __post_init__(self):
        if not isinstance(self.hash_part, bytes) or len(self.hash_part) != HASH_BYTES:
            raise ValueError(f"Address hash must be {HASH_BYTES} bytes")
        if not -128 <= self.workchain <= 127:
            raise ValueError(f"Workchain out of range: {self.workchain}")

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def is_address(value: Any) -> bool:
        """True for a well-formed Address, False for anything else."""
        return isinstance(value, Address)

    @staticmethod
    def is_raw(source: str) -> bool:
        return bool(_RAW_PATTERN.match(source))

    @staticmethod
    def is_friendly(source: str) -> bool:
        if len(source) != FRIENDLY_LENGTH:
            return False
        try:
            Address.parse_friendly(source)
        except AddressParseError:
            return False
        return True

    @classmethod
    def parse(cls, source: str) -> Address:
        """Parse either textual form."""
        if cls.is_raw(source):
            return cls.parse_raw(source)
        return cls.parse_friendly(source)

    @classmethod
    def parse_raw(cls, source: str) -> Address:
        match = _RAW_PATTERN.match(source)
        if not match:
            raise AddressParseError(f"Invalid raw address: {source!r}")
        workchain = int(match.group(1))
        if not -128 <= workchain <= 127:
            raise AddressParseError(f"Invalid workchain in address: {source!r}")
        return cls(workchain, bytes.fromhex(match.group(2)))

    @classmethod
    def parse_friendly(cls, source: str) -> Address:
        if len(source) != FRIENDLY_LENGTH:
            raise AddressParseError(f"Invalid friendly address length: {source!r}")
        try:
            data = base64.urlsafe_b64decode(source.replace("+", "-").replace("/", "_"))
        except (binascii.Error, ValueError) as e:
            raise AddressParseError(f"Invalid friendly address: {source!r}") from e
        if len(data) != 36:
            raise AddressParseError(f"Invalid friendly address: {source!r}")
        if _crc16(data[:34]) != data[34:]:
            raise AddressParseError(f"Invalid checksum in address: {source!r}")

        tag = data[0] & ~TEST_FLAG
        if tag not in (BOUNCEABLE_TAG, NON_BOUNCEABLE_TAG):
            raise AddressParseError(f"Unknown address tag 0x{data[0]:02x}: {source!r}")

        workchain = data[1] - 256 if data[1] > 127 else data[1]
        return cls(workchain, data[2:34])

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_raw_string(self) -> str:
        return f"{self.workchain}:{self.hash_part.hex()}"

    def to_string(
        self,
        url_safe: bool = True,
        bounceable: bool = True,
        test_only: bool = False,
    ) -> str:
        tag = BOUNCEABLE_TAG if bounceable else NON_BOUNCEABLE_TAG
        if test_only:
            tag |= TEST_FLAG
        body = bytes([tag, self.workchain & 0xFF]) + self.hash_part
        encoded = base64.b64encode(body + _crc16(body)).decode("ascii")
        if url_safe:
            encoded = encoded.replace("+", "-").replace("/", "_")
        return encoded

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Address({self.to_raw_string()})"


@dataclass(frozen=True, slots=True)
class ExternalAddress:
    """
    Off-ledger address carried by external messages.

    Not a well-formed Address: it never resolves to a contract label.
    """
    value: int
    bits: int

    def __post_init__(self):
        if self.bits < 0 or self.value < 0 or self.value.bit_length() > self.bits:
            raise ValueError(f"External address value does not fit in {self.bits} bits")

    def __str__(self) -> str:
        return f"External<{self.bits}:{self.value}>"
