"""
logger.py - Session logger for sandboxed ledger tests

The Logger labels contracts, reports their balances and prints the
transactions produced by each test step as tables:

    logger = Logger(blockchain)
    logger.add_contract(counter, "Counter")
    logger.add_contract(deployer, "Deployer")

    result = await counter.send(...)
    logger.log_transactions(result.transactions, "Deploy")
    await logger.log_contracts()

It never changes ledger state. Balance lookups that fail are reported and
re-raised unchanged: hiding them would hide the condition under test.
"""

from __future__ import annotations
import asyncio
import sys
from typing import Dict, Iterable, List, Optional, TextIO

from .address import Address
from .coins import format_coins
from .core import Blockchain
from .labels import LabelRegistry, Labelable, address_key
from .records import Transaction
from .summary import DisplayRow, summarize_transactions
from .table import render_table


FIELD_CONTRACT = "Contract"
FIELD_CONTRACT_BALANCE = "Contract Balance"


class Logger:
    """
    Labels and balances for the contracts of one test session.

    Args:
        blockchain: Sandbox to read balances from.
        verbose: Print tables (default: True). When False, the log_*
            methods still build and return their rows.
        out: Stream for tables (default: sys.stdout at call time).
    """

    def __init__(
        self,
        blockchain: Blockchain,
        verbose: bool = True,
        out: Optional[TextIO] = None,
    ):
        self.blockchain = blockchain
        self.verbose = verbose
        self._out = out
        self.labels = LabelRegistry()

    # ========================================================================
    # LABELS
    # ========================================================================

    def add_contract(self, contract: Labelable, label: str) -> None:
        """
        Label a contract, an Address or an address string.

        Raises:
            DuplicateLabelError: the address is already labeled.
        """
        self.labels.register(address_key(contract), label)

    def get_contract_label(self, address: Address) -> str:
        """Label for address, or its shortened form when unlabeled."""
        return self.labels.label_for(address)

    # ========================================================================
    # BALANCES
    # ========================================================================

    async def get_contract_balance(self, address: Address) -> int:
        """
        Current balance of the contract at address, in subunits.

        Lookup errors are reported on stderr and re-raised as they are.
        """
        try:
            contract = await self.blockchain.get_contract(address)
        except Exception as e:
            print(f"Error fetching contract balance for {address}: {e!r}", file=sys.stderr)
            raise
        return contract.balance

    async def get_contract_data(self) -> List[Dict[str, str]]:
        """
        One row per labeled contract, in labeling order.

        Balances are fetched concurrently; the first failure propagates.
        """
        entries = list(self.labels)
        balances = await asyncio.gather(*(
            self.get_contract_balance(Address.parse(key)) for key, _ in entries
        ))
        return [
            {FIELD_CONTRACT: label, FIELD_CONTRACT_BALANCE: format_coins(balance)}
            for (_, label), balance in zip(entries, balances)
        ]

    async def log_contracts(self) -> List[Dict[str, str]]:
        """Print every labeled contract with its balance."""
        data = await self.get_contract_data()
        self._emit(render_table(data))
        return data

    # ========================================================================
    # TRANSACTIONS
    # ========================================================================

    def log_transactions(
        self,
        transactions: Iterable[Transaction],
        info: Optional[str] = None,
    ) -> List[DisplayRow]:
        """
        Print the generic transactions of a step as a table.

        Args:
            transactions: Transactions in execution order.
            info: Heading printed before the table.

        Returns:
            The rows printed, in the order of transactions.
        """
        if info:
            self._emit(info)
        rows = summarize_transactions(transactions, self.get_contract_label)
        self._emit(render_table(rows))
        return rows

    def _emit(self, text: str) -> None:
        if self.verbose:
            print(text, file=self._out if self._out is not None else sys.stdout)

    def __repr__(self) -> str:
        return f"Logger({len(self.labels)} contracts)"
