from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from faucet_api.main import create_app
from faucet_api.utils.faucet import get_web3_factory

RPC_URL = "http://127.0.0.1:8545"
CONTRACT_ADDRESS = "0x" + "22" * 20
PRIVATE_KEY = "0x" + "11" * 32
# EIP-55 reference address
USER_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
TX_HASH = "0x" + "abc123" * 10 + "abcd"

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "POST, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


@pytest.fixture
def faucet_env(monkeypatch):
    """Complete faucet configuration, no frontend origin."""
    monkeypatch.setenv("DEGEN_RPC_URL", RPC_URL)
    monkeypatch.setenv("FAUCET_CONTRACT_ADDRESS", CONTRACT_ADDRESS)
    monkeypatch.setenv("DEV_PRIVATE_KEY", PRIVATE_KEY)
    monkeypatch.delenv("FRONTEND_URL", raising=False)


@pytest.fixture
def fake_w3():
    """Web3 stand-in: empty recipient balance, node accepts the transaction."""
    w3 = MagicMock()
    w3.eth.get_balance.return_value = 0
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.send_raw_transaction.return_value = bytes.fromhex(TX_HASH[2:])
    return w3


@pytest.fixture
def web3_factory(fake_w3):
    return MagicMock(return_value=fake_w3)


@pytest.fixture
def client(faucet_env, web3_factory):
    app = create_app()
    app.dependency_overrides[get_web3_factory] = lambda: web3_factory
    with TestClient(app) as test_client:
        yield test_client


def build_transaction_mock(fake_w3):
    return fake_w3.eth.contract.return_value.functions.requestFaucet.return_value.build_transaction
