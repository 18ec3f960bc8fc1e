"""
records.py - Read-only transaction records produced by the sandboxed ledger

These types mirror what the ledger hands back after sending a message:
a Transaction with an optional inbound Message, zero or more outbound
Messages, fees and a description of the phases that ran. ledgerlens only
reads them. All of them are immutable (frozen=True) and memory-optimized
(slots=True).

Amounts are integers in subunits (see core.DECIMAL).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .address import Address, ExternalAddress
from .cell import Cell
from .core import (
    MESSAGE_INTERNAL, MESSAGE_EXTERNAL_IN, MESSAGE_EXTERNAL_OUT,
    COMPUTE_VM, COMPUTE_SKIPPED, DESCRIPTION_GENERIC,
)


# Transaction description types reported by the ledger.
DESCRIPTION_TYPES = frozenset({
    DESCRIPTION_GENERIC,
    "storage",
    "tick-tock",
    "split-prepare",
    "split-install",
    "merge-prepare",
    "merge-install",
})


def _check_amount(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be int, got {type(value)}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


# ============================================================================
# VALUES
# ============================================================================

@dataclass(frozen=True, slots=True)
class CurrencyCollection:
    """Native coins plus any extra currencies (id -> amount)."""
    coins: int
    other: Tuple[Tuple[int, int], ...] = ()

    def __post_init__(self):
        _check_amount("coins", self.coins)


# ============================================================================
# MESSAGES
# ============================================================================

@dataclass(frozen=True, slots=True)
class InternalMessageInfo:
    """Message sent between two contracts. Carries value."""
    src: Address
    dest: Address
    value: CurrencyCollection
    bounce: bool = True
    bounced: bool = False
    ihr_disabled: bool = True
    ihr_fee: int = 0
    forward_fee: int = 0
    created_lt: int = 0
    created_at: int = 0
    type: str = field(default=MESSAGE_INTERNAL, init=False)


@dataclass(frozen=True, slots=True)
class ExternalInMessageInfo:
    """Message arriving from outside the ledger. Carries no value."""
    dest: Address
    src: Optional[ExternalAddress] = None
    import_fee: int = 0
    type: str = field(default=MESSAGE_EXTERNAL_IN, init=False)


@dataclass(frozen=True, slots=True)
class ExternalOutMessageInfo:
    """Message emitted by a contract to the outside world (events, logs)."""
    src: Address
    dest: Optional[ExternalAddress] = None
    created_lt: int = 0
    created_at: int = 0
    type: str = field(default=MESSAGE_EXTERNAL_OUT, init=False)


MessageInfo = Union[InternalMessageInfo, ExternalInMessageInfo, ExternalOutMessageInfo]


@dataclass(frozen=True, slots=True)
class Message:
    """
    A message with its routing info and optional body.

    Attributes:
        info: Routing header; its `type` tells internal from external.
        body: Payload cell, if the message carries one.
    """
    info: MessageInfo
    body: Optional[Cell] = None


# ============================================================================
# PHASES
# ============================================================================

@dataclass(frozen=True, slots=True)
class ComputeVm:
    """Compute phase that ran the contract code."""
    exit_code: int
    success: bool = True
    gas_used: int = 0
    vm_steps: int = 0
    type: str = field(default=COMPUTE_VM, init=False)


@dataclass(frozen=True, slots=True)
class ComputeSkipped:
    """Compute phase that did not run (no state, no gas, ...)."""
    reason: str = "no-state"
    type: str = field(default=COMPUTE_SKIPPED, init=False)


ComputePhase = Union[ComputeVm, ComputeSkipped]


@dataclass(frozen=True, slots=True)
class ActionPhase:
    """Outcome of carrying out the actions queued by the compute phase."""
    total_actions: int
    success: bool = True
    result_code: int = 0
    spec_actions: int = 0
    skipped_actions: int = 0
    messages_created: int = 0

    def __post_init__(self):
        if self.total_actions < 0:
            raise ValueError(f"total_actions must be non-negative, got {self.total_actions}")


@dataclass(frozen=True, slots=True)
class TransactionDescription:
    """
    How the ledger processed a transaction.

    Only "generic" descriptions go through every phase; the other types
    (storage, tick-tock, split/merge) may carry neither phase.
    """
    type: str = DESCRIPTION_GENERIC
    compute_phase: Optional[ComputePhase] = None
    action_phase: Optional[ActionPhase] = None
    aborted: bool = False

    def __post_init__(self):
        if self.type not in DESCRIPTION_TYPES:
            raise ValueError(f"Unknown transaction description type: {self.type!r}")


# ============================================================================
# TRANSACTION
# ============================================================================

@dataclass(frozen=True, slots=True)
class Transaction:
    """
    An executed transaction as reported by the ledger.

    Attributes:
        in_message: Message that triggered the transaction, if any.
        out_messages: Messages emitted, in emission order.
        total_fees: Fees charged for the whole transaction.
        description: Phase outcomes.
        address: Account the transaction ran on.
        lt: Logical time of the transaction.
        now: Unix time of the block.
    """
    total_fees: CurrencyCollection
    description: TransactionDescription
    in_message: Optional[Message] = None
    out_messages: Tuple[Message, ...] = ()
    address: Optional[Address] = None
    lt: int = 0
    now: int = 0

    def __post_init__(self):
        if not isinstance(self.out_messages, tuple):
            object.__setattr__(self, 'out_messages', tuple(self.out_messages))
