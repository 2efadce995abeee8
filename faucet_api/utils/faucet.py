import asyncio
import logging
from typing import Any, Callable, Dict, List
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from faucet_api.utils.errors import DuplicateClaimError, ExternalCallError, IneligibilityError

logger = logging.getLogger(__name__)

# Only the method the backend calls
FAUCET_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [{"internalType": "address", "name": "_recipient", "type": "address"}],
        "name": "requestFaucet",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    }
]

# Revert reason of the faucet contract for a repeat claim. Matching on text is
# best-effort: if the contract changes its message the failure becomes a plain 500.
DUPLICATE_CLAIM_MARKER = "Address has already claimed faucet"

Web3Factory = Callable[[str], Web3]


def is_valid_address(value: Any) -> bool:
    """
    Accept all-lower or all-upper hex addresses, and mixed case only with a
    correct EIP-55 checksum.
    """
    if not isinstance(value, str) or not Web3.is_address(value):
        return False
    hex_part = value[2:] if value[:2].lower() == "0x" else value
    if hex_part != hex_part.lower() and hex_part != hex_part.upper():
        return Web3.is_checksum_address(value)
    return True


def get_web3(rpc_url: str) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url))


def get_web3_factory() -> Web3Factory:
    """FastAPI dependency returning how a Web3 instance is built for an RPC URL."""
    return get_web3


def load_signer(private_key: str) -> LocalAccount:
    return Account.from_key(private_key)


def is_duplicate_claim(error: Exception) -> bool:
    """True when an upstream failure carries the contract's repeat-claim revert reason."""
    texts = [str(error), getattr(error, "message", None) or ""]
    return any(DUPLICATE_CLAIM_MARKER in text for text in texts)


async def get_native_balance(w3: Web3, user_address: str) -> int:
    try:
        return await asyncio.to_thread(w3.eth.get_balance, user_address)
    except Exception as e:
        raise ExternalCallError(f"Balance query failed for {user_address}: {str(e)}") from e


async def check_eligibility(w3: Web3, user_address: str) -> int:
    """
    Only addresses with an empty native balance may claim.

    The check is point-in-time. Two requests for the same address can both pass
    before either transaction lands; the faucet contract rejects the second claim.
    """
    balance = await get_native_balance(w3, user_address)
    if balance > 0:
        raise IneligibilityError(f"{user_address} already holds {balance} wei")
    return balance


def _send_request_faucet(w3: Web3, signer: LocalAccount, contract_address: str, user_address: str) -> str:
    faucet_contract = w3.eth.contract(address=contract_address, abi=FAUCET_ABI)

    # Gas and fees are filled in by web3, a contract revert surfaces during estimation
    tx = faucet_contract.functions.requestFaucet(user_address).build_transaction({
        'from': signer.address,
        'nonce': w3.eth.get_transaction_count(signer.address, 'pending'),
    })

    signed_tx = w3.eth.account.sign_transaction(tx, signer.key)
    tx_hash = w3.eth.send_raw_transaction(signed_tx.raw_transaction)
    return Web3.to_hex(tx_hash)


async def submit_faucet_request(
    w3: Web3,
    signer: LocalAccount,
    contract_address: str,
    user_address: str
) -> str:
    """
    Call requestFaucet(user_address) from the operator wallet.

    Returns the transaction hash as soon as the node accepts the transaction,
    without waiting for a receipt.
    """
    try:
        return await asyncio.to_thread(_send_request_faucet, w3, signer, contract_address, user_address)
    except Exception as e:
        if is_duplicate_claim(e):
            raise DuplicateClaimError(f"Faucet contract rejected {user_address}: {str(e)}") from e
        raise ExternalCallError(f"requestFaucet failed for {user_address}: {str(e)}") from e
