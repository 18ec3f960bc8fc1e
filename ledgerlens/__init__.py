"""
ledgerlens - Diagnostic logging for sandboxed ledger tests

Labels contracts, reports their balances and renders transaction records as
readable tables. Read-only: nothing here changes ledger state.

Usage:
    from ledgerlens import Logger, format_coins, to_nano

    logger = Logger(blockchain)
    logger.add_contract(counter, "Counter")
    logger.add_contract(deployer, "Deployer")

    logger.log_transactions(result.transactions, "Deploy")
    await logger.log_contracts()

    format_coins(to_nano("0.05"))        # "0.05"
    format_coins(123_456_789)            # "0.123457"
    format_coins(None)                   # "∞"
"""

# Core constants, exceptions and protocols
from .core import (
    DECIMAL_COUNT,
    DECIMAL,
    DEFAULT_PRECISION,
    NOT_APPLICABLE,
    NO_OPCODE,
    NO_SOURCE,
    NO_DESTINATION,
    NO_COINS,
    NO_ACTIONS,
    NOT_EXECUTED,
    LedgerLensError,
    DuplicateLabelError,
    AddressParseError,
    CellUnderflow,
    Account,
    Contract,
    Blockchain,
)

# Record types
from .address import Address, ExternalAddress
from .cell import Cell, Slice
from .records import (
    CurrencyCollection,
    InternalMessageInfo,
    ExternalInMessageInfo,
    ExternalOutMessageInfo,
    Message,
    ComputeVm,
    ComputeSkipped,
    ActionPhase,
    TransactionDescription,
    Transaction,
)

# Amount formatting
from .coins import format_coins, format_coins_pure, from_nano, to_nano

# Labels
from .labels import LabelRegistry, shorten_string, address_key

# Summaries and rendering
from .summary import (
    DisplayRow,
    FIELDS,
    extract_opcode,
    summarize_transaction,
    summarize_transactions,
)
from .table import render_table, format_cell

# Session logger
from .logger import Logger

__all__ = [
    # Core
    'DECIMAL_COUNT', 'DECIMAL', 'DEFAULT_PRECISION', 'NOT_APPLICABLE',
    'NO_OPCODE', 'NO_SOURCE', 'NO_DESTINATION', 'NO_COINS', 'NO_ACTIONS', 'NOT_EXECUTED',
    'LedgerLensError', 'DuplicateLabelError', 'AddressParseError', 'CellUnderflow',
    'Account', 'Contract', 'Blockchain',
    # Records
    'Address', 'ExternalAddress', 'Cell', 'Slice',
    'CurrencyCollection', 'InternalMessageInfo', 'ExternalInMessageInfo',
    'ExternalOutMessageInfo', 'Message', 'ComputeVm', 'ComputeSkipped',
    'ActionPhase', 'TransactionDescription', 'Transaction',
    # Coins
    'format_coins', 'format_coins_pure', 'from_nano', 'to_nano',
    # Labels
    'LabelRegistry', 'shorten_string', 'address_key',
    # Summaries
    'DisplayRow', 'FIELDS', 'extract_opcode', 'summarize_transaction', 'summarize_transactions',
    'render_table', 'format_cell',
    # Logger
    'Logger',
]

__version__ = '1.0.0'
