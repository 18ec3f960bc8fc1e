"""
Core constants, exceptions and protocols for ledgerlens.

This module provides the foundations shared by the rest of the package:
1. Constants: coin scale, display precision and the fallback sentinels used
   when a transaction field is absent
2. Exceptions: LedgerLensError and its specific error types
3. Protocols: the read-only collaborators (Blockchain, Account, Contract)
   supplied by the sandbox the tests run against

Nothing in this package mutates ledger state. The protocols only describe
what ledgerlens reads.
"""

from __future__ import annotations
from typing import Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from .address import Address


# ============================================================================
# CONSTANTS
# ============================================================================

# Number of subunits per display unit is 10**DECIMAL_COUNT.
DECIMAL_COUNT = 9
DECIMAL = 10 ** DECIMAL_COUNT

# Fractional digits rendered when the caller does not ask for a precision.
DEFAULT_PRECISION = 6

# Rendered in place of an absent (unbounded / not applicable) amount.
NOT_APPLICABLE = "∞"

# Summary fallbacks. Each one is distinct from any real value of its field.
NO_OPCODE = "0gR33n0gr"
NO_SOURCE = "Shrek"
NO_DESTINATION = "Donkey"
NO_COINS = "No coins!"
NO_ACTIONS = "No actions here?"
NOT_EXECUTED = "Ogres have layers?"

# Opcodes are the leading 32 bits of an internal message body.
OPCODE_BITS = 32

# Only transactions with this description type are summarized.
DESCRIPTION_GENERIC = "generic"

# Message info type tags.
MESSAGE_INTERNAL = "internal"
MESSAGE_EXTERNAL_IN = "external-in"
MESSAGE_EXTERNAL_OUT = "external-out"

# Compute phase type tags.
COMPUTE_VM = "vm"
COMPUTE_SKIPPED = "skipped"

# Addresses longer than this are shortened to "abcd...wxyz" when unlabeled.
SHORTEN_THRESHOLD = 8
SHORTEN_KEEP = 4

# Widest cell rendered by render_table before truncation.
MAX_CELL_WIDTH = 64


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerLensError(Exception):
    """Base exception for all ledgerlens errors."""
    pass


class DuplicateLabelError(LedgerLensError):
    """Raised when an address that already has a label is labeled again."""
    pass


class AddressParseError(LedgerLensError, ValueError):
    """Raised when a string is not a valid raw or user-friendly address."""
    pass


class CellUnderflow(LedgerLensError):
    """Raised when reading more bits than a slice has left."""
    pass


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class Account(Protocol):
    """Account snapshot returned by the sandbox. Only the balance is read."""

    balance: int


@runtime_checkable
class Contract(Protocol):
    """Anything deployed at an address, e.g. an opened sandbox contract."""

    @property
    def address(self) -> 'Address':
        ...


@runtime_checkable
class Blockchain(Protocol):
    """
    Read-only interface to the sandboxed ledger.

    get_contract() is asynchronous and may raise for an unknown address.
    ledgerlens never catches that error for good: it reports it and
    re-raises it to the caller unchanged.
    """

    async def get_contract(self, address: 'Address') -> Account:
        """Return the account deployed at address."""
        ...
