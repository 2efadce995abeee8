import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv
from eth_account import Account
from web3 import Web3
from faucet_api.utils.errors import ConfigurationError
from faucet_api.utils.faucet import is_valid_address

# Load .env file from the project root
project_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(project_root / ".env")

logger = logging.getLogger(__name__)

# Server settings
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Faucet settings, read on every request
REQUIRED_VARS = [
    "DEGEN_RPC_URL",
    "FAUCET_CONTRACT_ADDRESS",
    "DEV_PRIVATE_KEY",
]
DEFAULT_ALLOWED_ORIGIN = "*"


@dataclass(frozen=True)
class FaucetSettings:
    rpc_url: str
    contract_address: str
    private_key: str = field(repr=False)
    allowed_origin: str = DEFAULT_ALLOWED_ORIGIN


def get_allowed_origin() -> str:
    """Origin allowed to call the faucet from a browser, '*' when unset."""
    return os.getenv("FRONTEND_URL") or DEFAULT_ALLOWED_ORIGIN


def load_faucet_settings() -> FaucetSettings:
    """
    Read the faucet configuration from the environment.

    Raises ConfigurationError when a required variable is missing or malformed.
    Only variable names are logged, never their values.
    """
    missing_vars = [name for name in REQUIRED_VARS if not (os.getenv(name) or "").strip()]
    if missing_vars:
        logger.error("Missing environment variables: %s", ", ".join(missing_vars))
        raise ConfigurationError(f"Missing environment variables: {', '.join(missing_vars)}")

    contract_address = os.getenv("FAUCET_CONTRACT_ADDRESS").strip()
    if not is_valid_address(contract_address):
        logger.error("FAUCET_CONTRACT_ADDRESS is not a valid address")
        raise ConfigurationError("FAUCET_CONTRACT_ADDRESS is not a valid address")

    private_key = os.getenv("DEV_PRIVATE_KEY").strip()
    try:
        Account.from_key(private_key)
    except Exception:
        # The exception text may echo the key, so it is not chained or logged
        logger.error("DEV_PRIVATE_KEY could not be loaded as a private key")
        raise ConfigurationError("DEV_PRIVATE_KEY could not be loaded as a private key") from None

    return FaucetSettings(
        rpc_url=os.getenv("DEGEN_RPC_URL").strip(),
        contract_address=Web3.to_checksum_address(contract_address),
        private_key=private_key,
        allowed_origin=get_allowed_origin(),
    )
