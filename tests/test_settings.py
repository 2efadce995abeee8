import logging

import pytest

from faucet_api.config.settings import get_allowed_origin, load_faucet_settings
from faucet_api.utils.errors import ConfigurationError
from conftest import CONTRACT_ADDRESS, PRIVATE_KEY, RPC_URL


def test_loads_complete_configuration(faucet_env):
    settings = load_faucet_settings()
    assert settings.rpc_url == RPC_URL
    assert settings.contract_address.lower() == CONTRACT_ADDRESS
    assert settings.private_key == PRIVATE_KEY
    assert settings.allowed_origin == "*"


def test_private_key_is_hidden_from_repr(faucet_env):
    assert PRIVATE_KEY not in repr(load_faucet_settings())


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_values_are_reported_by_name(monkeypatch, faucet_env, caplog, value):
    if value is None:
        monkeypatch.delenv("DEGEN_RPC_URL")
        monkeypatch.delenv("DEV_PRIVATE_KEY")
    else:
        monkeypatch.setenv("DEGEN_RPC_URL", value)
        monkeypatch.setenv("DEV_PRIVATE_KEY", value)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(ConfigurationError):
            load_faucet_settings()

    assert "Missing environment variables: DEGEN_RPC_URL, DEV_PRIVATE_KEY" in caplog.text


def test_invalid_contract_address(monkeypatch, faucet_env):
    monkeypatch.setenv("FAUCET_CONTRACT_ADDRESS", "0xnot-a-contract")
    with pytest.raises(ConfigurationError, match="FAUCET_CONTRACT_ADDRESS"):
        load_faucet_settings()


def test_unusable_private_key_is_never_logged(monkeypatch, faucet_env, caplog):
    monkeypatch.setenv("DEV_PRIVATE_KEY", "0xdeadbeef")
    with caplog.at_level(logging.ERROR):
        with pytest.raises(ConfigurationError) as exc_info:
            load_faucet_settings()
    assert "deadbeef" not in caplog.text
    assert "deadbeef" not in str(exc_info.value)
    assert exc_info.value.__cause__ is None


def test_allowed_origin(monkeypatch):
    monkeypatch.delenv("FRONTEND_URL", raising=False)
    assert get_allowed_origin() == "*"
    monkeypatch.setenv("FRONTEND_URL", "https://faucet.example.org")
    assert get_allowed_origin() == "https://faucet.example.org"


def test_contract_address_with_bad_checksum(monkeypatch, faucet_env):
    monkeypatch.setenv("FAUCET_CONTRACT_ADDRESS", "0x5AAeb6053F3E94C9b9A09f33669435E7Ef1BeAed")
    with pytest.raises(ConfigurationError, match="FAUCET_CONTRACT_ADDRESS"):
        load_faucet_settings()
