"""
summary.py - Flatten transaction records into display rows

summarize_transaction() is a total function over the presence states of a
transaction's fields: every field of the row is always filled, either with
a formatted value or with that field's fallback sentinel. The only case
that yields no row is a non-generic transaction, which the caller filters.

Row fields, in order:
    Source, Destination, Type, Opcode, Incoming Value, Outgoing Value,
    Total Fees, Outgoing Actions Count, Exit Code
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .address import Address
from .cell import Cell
from .coins import format_coins
from .core import (
    DESCRIPTION_GENERIC, OPCODE_BITS,
    NO_OPCODE, NO_SOURCE, NO_DESTINATION, NO_COINS, NO_ACTIONS, NOT_EXECUTED,
)
from .records import (
    Message, InternalMessageInfo, Transaction,
    ActionPhase, ComputeVm,
)


# Resolves a well-formed address to the label shown in the row.
LabelResolver = Callable[[Address], str]

DisplayRow = Dict[str, Any]

FIELD_SOURCE = "Source"
FIELD_DESTINATION = "Destination"
FIELD_TYPE = "Type"
FIELD_OPCODE = "Opcode"
FIELD_INCOMING_VALUE = "Incoming Value"
FIELD_OUTGOING_VALUE = "Outgoing Value"
FIELD_TOTAL_FEES = "Total Fees"
FIELD_ACTIONS_COUNT = "Outgoing Actions Count"
FIELD_EXIT_CODE = "Exit Code"

FIELDS = (
    FIELD_SOURCE,
    FIELD_DESTINATION,
    FIELD_TYPE,
    FIELD_OPCODE,
    FIELD_INCOMING_VALUE,
    FIELD_OUTGOING_VALUE,
    FIELD_TOTAL_FEES,
    FIELD_ACTIONS_COUNT,
    FIELD_EXIT_CODE,
)


def extract_opcode(message: Optional[Message]) -> str:
    """Leading 32 bits of an internal message body as "0x..", else NO_OPCODE."""
    match message:
        case Message(info=InternalMessageInfo(), body=Cell() as body):
            parser = body.begin_parse()
            if parser.remaining_bits >= OPCODE_BITS:
                return f"0x{parser.preload_uint(OPCODE_BITS):x}"
    return NO_OPCODE


def _endpoint_label(endpoint: Any, label_of: LabelResolver, fallback: str) -> str:
    match endpoint:
        case Address():
            return label_of(endpoint)
        case _:
            return fallback


def _incoming_value(message: Optional[Message]) -> str:
    match message:
        case Message(info=InternalMessageInfo(value=value)):
            return format_coins(value.coins)
        case _:
            return format_coins(None)


def _outgoing_value(out_messages: Iterable[Message]) -> Union[str, List[str]]:
    """
    NO_COINS when nothing was sent; otherwise the internal messages' values.

    The list is empty when messages went out but none of them was internal.
    """
    out_messages = tuple(out_messages)
    if not out_messages:
        return NO_COINS
    values = []
    for message in out_messages:
        match message.info:
            case InternalMessageInfo(value=value):
                values.append(format_coins(value.coins))
    return values


def _actions_count(action_phase: Optional[ActionPhase]) -> Union[int, str]:
    match action_phase:
        case ActionPhase(total_actions=total):
            return total
        case _:
            return NO_ACTIONS


def _exit_code(compute_phase: Any) -> Union[int, str]:
    match compute_phase:
        case ComputeVm(exit_code=code):
            return code
        case _:
            return NOT_EXECUTED


def summarize_transaction(tx: Transaction, label_of: LabelResolver) -> Optional[DisplayRow]:
    """
    Build the display row for one transaction.

    Args:
        tx: Transaction record from the ledger.
        label_of: Maps a well-formed address to its display label.

    Returns:
        Row with every field in FIELDS, or None if the transaction is not
        generic (storage, tick-tock, split/merge).
    """
    description = tx.description
    if description.type != DESCRIPTION_GENERIC:
        return None

    in_message = tx.in_message
    info = in_message.info if in_message is not None else None
    source = info.src if info is not None else None
    destination = info.dest if info is not None else None

    return {
        FIELD_SOURCE: _endpoint_label(source, label_of, NO_SOURCE),
        FIELD_DESTINATION: _endpoint_label(destination, label_of, NO_DESTINATION),
        FIELD_TYPE: info.type if info is not None else None,
        FIELD_OPCODE: extract_opcode(in_message),
        FIELD_INCOMING_VALUE: _incoming_value(in_message),
        FIELD_OUTGOING_VALUE: _outgoing_value(tx.out_messages),
        FIELD_TOTAL_FEES: format_coins(tx.total_fees.coins),
        FIELD_ACTIONS_COUNT: _actions_count(description.action_phase),
        FIELD_EXIT_CODE: _exit_code(description.compute_phase),
    }


def summarize_transactions(
    transactions: Iterable[Transaction],
    label_of: LabelResolver,
    max_workers: Optional[int] = None,
) -> List[DisplayRow]:
    """
    Summarize a batch, dropping non-generic transactions.

    Rows keep the order of the input. With max_workers set, transactions
    are summarized on a thread pool; each summary is independent.
    """
    transactions = list(transactions)
    if max_workers is None:
        rows = [summarize_transaction(tx, label_of) for tx in transactions]
    else:
        if max_workers < 1:
            raise ValueError("max_workers must be a positive integer")
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            rows = list(pool.map(lambda tx: summarize_transaction(tx, label_of), transactions))
    return [row for row in rows if row is not None]
