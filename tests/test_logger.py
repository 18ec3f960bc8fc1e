"""
test_logger.py - Tests for the session Logger

Covers the deploy-and-inspect flow of a sandboxed test:
- Labeling contracts and failing fast on duplicate labels
- Balance lookups, concurrently, with errors re-raised unchanged
- Transaction tables: non-generic filtered out, order preserved
- verbose=False still returns rows but prints nothing
"""

import io

import pytest

from ledgerlens import Logger, DuplicateLabelError, AddressParseError, NO_COINS, shorten_string

from tests.fake_blockchain import (
    FakeBlockchain, FakeContract, make_address, internal, generic_tx, tick_tock_tx,
)


class TestLabels:

    def test_labels_resolve(self, labeled_logger, deployer, counter):
        assert labeled_logger.get_contract_label(counter) == "Counter"
        assert labeled_logger.get_contract_label(deployer) == "Deployer"

    def test_unlabeled_is_shortened(self, labeled_logger, stranger):
        assert labeled_logger.get_contract_label(stranger) == shorten_string(str(stranger))

    def test_duplicate_label_raises(self, labeled_logger, counter):
        with pytest.raises(DuplicateLabelError):
            labeled_logger.add_contract(counter, "Counter again")
        assert labeled_logger.get_contract_label(counter) == "Counter"

    def test_duplicate_across_forms_raises(self, labeled_logger, counter):
        """A raw string and the contract object name the same address."""
        with pytest.raises(DuplicateLabelError):
            labeled_logger.add_contract(counter.to_raw_string(), "Counter again")


class TestBalances:

    @pytest.mark.asyncio
    async def test_get_contract_balance(self, logger, counter):
        assert await logger.get_contract_balance(counter) == 50_000_000

    @pytest.mark.asyncio
    async def test_contract_data_in_label_order(self, labeled_logger):
        assert await labeled_logger.get_contract_data() == [
            {"Contract": "Counter", "Contract Balance": "0.05"},
            {"Contract": "Deployer", "Contract Balance": "999.95"},
        ]

    @pytest.mark.asyncio
    async def test_each_contract_looked_up_once(self, labeled_logger, blockchain, deployer, counter):
        await labeled_logger.get_contract_data()
        assert sorted(blockchain.lookups, key=str) == sorted([deployer, counter], key=str)

    @pytest.mark.asyncio
    async def test_lookup_error_reraised_unchanged(self, deployer, counter, capsys):
        failure = RuntimeError("sandbox exploded")
        chain = FakeBlockchain({deployer: 1}, failing={counter: failure})
        logger = Logger(chain, verbose=False)
        logger.add_contract(deployer, "Deployer")
        logger.add_contract(counter, "Counter")

        with pytest.raises(RuntimeError) as excinfo:
            await logger.get_contract_data()
        assert excinfo.value is failure
        assert "Error fetching contract balance" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_unknown_contract_propagates(self, logger, stranger):
        logger.add_contract(stranger, "Ghost")
        with pytest.raises(KeyError):
            await logger.get_contract_data()

    @pytest.mark.asyncio
    async def test_non_address_label_key_fails_on_lookup(self, logger):
        logger.add_contract("not-an-address", "Nobody")
        with pytest.raises(AddressParseError):
            await logger.get_contract_data()

    @pytest.mark.asyncio
    async def test_log_contracts_prints_table(self, labeled_logger, out):
        data = await labeled_logger.log_contracts()
        printed = out.getvalue()
        assert len(data) == 2
        assert "Contract Balance" in printed
        assert "999.95" in printed


class TestLogTransactions:

    def test_rows_for_deploy(self, labeled_logger, deploy_transactions):
        rows = labeled_logger.log_transactions(deploy_transactions)
        assert [(r["Source"], r["Destination"]) for r in rows] == [
            ("Deployer", "Counter"),
            ("Counter", "Deployer"),
        ]
        assert rows[0]["Opcode"] == "0x946a98b6"
        assert rows[0]["Incoming Value"] == "0.05"
        assert rows[0]["Outgoing Value"] == ["0.042"]
        assert rows[0]["Total Fees"] == "0.0075"
        assert rows[0]["Outgoing Actions Count"] == 2
        assert rows[1]["Outgoing Value"] == NO_COINS
        assert rows[1]["Total Fees"] == "0.000124"

    def test_non_generic_filtered(self, labeled_logger, deploy_transactions):
        mixed = [tick_tock_tx()] + deploy_transactions + [tick_tock_tx()]
        rows = labeled_logger.log_transactions(mixed)
        assert len(rows) == 2
        assert rows[0]["Source"] == "Deployer"

    def test_info_printed_before_table(self, labeled_logger, deploy_transactions, out):
        labeled_logger.log_transactions(deploy_transactions, "Deploy")
        printed = out.getvalue()
        assert printed.startswith("Deploy\n")
        assert printed.index("Deploy") < printed.index("┌")

    def test_quiet_logger_prints_nothing(self, blockchain, deploy_transactions):
        stream = io.StringIO()
        logger = Logger(blockchain, verbose=False, out=stream)
        rows = logger.log_transactions(deploy_transactions, "Deploy")
        assert len(rows) == 2
        assert stream.getvalue() == ""

    def test_defaults_to_stdout(self, blockchain, capsys):
        logger = Logger(blockchain)
        logger.log_transactions([], "Nothing")
        assert "Nothing" in capsys.readouterr().out

    def test_unlabeled_endpoints_shortened(self, logger):
        a, b = make_address(10), make_address(11)
        logger.add_contract(FakeContract(a), "A")
        rows = logger.log_transactions([
            generic_tx(internal(a, b, 1)),
        ])
        assert rows[0]["Source"] == "A"
        assert rows[0]["Destination"] == shorten_string(str(b))
