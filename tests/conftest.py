"""
conftest.py - Shared pytest fixtures for ledgerlens tests

Provides common fixtures used across unit and conformance tests:
- Addresses for a small cast of contracts
- A funded FakeBlockchain and a quiet Logger bound to it
- A deploy-style transaction chain
"""

import io

import pytest

from ledgerlens import Logger, to_nano

from tests.fake_blockchain import (
    FakeBlockchain, FakeContract, make_address,
    internal, external_out, generic_tx,
)


# Opcode of a "Deploy" message in the counter example contract.
DEPLOY_OP = 0x946A98B6


# =============================================================================
# ADDRESS FIXTURES
# =============================================================================

@pytest.fixture
def deployer():
    return make_address(1)


@pytest.fixture
def counter():
    return make_address(2)


@pytest.fixture
def stranger():
    """Address that is never labeled."""
    return make_address(3)


# =============================================================================
# LEDGER FIXTURES
# =============================================================================

@pytest.fixture
def blockchain(deployer, counter):
    """Sandbox with the deployer funded and the counter deployed."""
    return FakeBlockchain({
        deployer: to_nano("999.95"),
        counter: to_nano("0.05"),
    })


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def logger(blockchain, out):
    """Logger printing into an in-memory stream."""
    return Logger(blockchain, out=out)


@pytest.fixture
def labeled_logger(logger, deployer, counter):
    logger.add_contract(FakeContract(counter), "Counter")
    logger.add_contract(deployer, "Deployer")
    return logger


# =============================================================================
# TRANSACTION FIXTURES
# =============================================================================

@pytest.fixture
def deploy_transactions(deployer, counter):
    """
    Deployer sends 0.05 to Counter, Counter emits an event and bounces
    change back to Deployer.
    """
    return [
        generic_tx(
            in_message=internal(deployer, counter, to_nano("0.05"), op=DEPLOY_OP),
            out_messages=[
                external_out(counter),
                internal(counter, deployer, to_nano("0.042")),
            ],
            fees=to_nano("0.0075"),
            exit_code=0,
            total_actions=2,
            lt=1,
        ),
        generic_tx(
            in_message=internal(counter, deployer, to_nano("0.042")),
            fees=123_456,
            exit_code=0,
            total_actions=0,
            lt=2,
        ),
    ]
