"""
Transaction Helpers
Build, sign and send contract transactions from a local account
"""

from typing import Dict, Optional
from web3 import Web3
from eth_account.signers.local import LocalAccount
from loguru import logger


def build_transaction(
    w3: Web3,
    buildable,
    account: LocalAccount,
    chain_id: int,
    gas_buffer: float = 1.2,
    default_gas_limit: int = 6_000_000,
    value: int = 0
) -> Dict:
    """
    Build a legacy transaction for a constructor or function call

    Args:
        w3: Web3 instance
        buildable: ContractConstructor or ContractFunction
        account: Sender
        chain_id: Chain id to sign for
        gas_buffer: Multiplier applied to the gas estimate
        default_gas_limit: Used when estimation fails

    Returns:
        Transaction dict ready to sign
    """
    params = {'from': account.address, 'value': value}

    try:
        gas_estimate = buildable.estimate_gas(params)
        gas_limit = int(gas_estimate * gas_buffer)
    except Exception as e:
        logger.warning(f"Gas estimation failed: {e}, using default")
        gas_limit = default_gas_limit

    gas_price = w3.eth.gas_price

    logger.debug(f"Gas limit: {gas_limit}, gas price: {w3.from_wei(gas_price, 'gwei')} gwei")

    return buildable.build_transaction({
        **params,
        'nonce': w3.eth.get_transaction_count(account.address, 'pending'),
        'gas': gas_limit,
        'gasPrice': gas_price,
        'chainId': chain_id
    })


def sign_and_send(w3: Web3, account: LocalAccount, transaction: Dict) -> str:
    """
    Sign locally and submit

    Returns:
        0x-prefixed transaction hash
    """
    signed_tx = account.sign_transaction(transaction)
    tx_hash = w3.eth.send_raw_transaction(signed_tx.raw_transaction)
    return Web3.to_hex(tx_hash)


def send_contract_call(
    w3: Web3,
    function_call,
    account: LocalAccount,
    chain_id: int,
    timeout: float = 120,
    poll_latency: float = 0.5,
    value: int = 0,
    gas_buffer: float = 1.2,
    default_gas_limit: int = 1_000_000
):
    """
    Execute a state-mutating function and wait for it to be mined

    Raises:
        ValueError: transaction mined but reverted

    Returns:
        Transaction receipt
    """
    tx = build_transaction(
        w3, function_call, account, chain_id,
        gas_buffer=gas_buffer,
        default_gas_limit=default_gas_limit,
        value=value
    )
    tx_hash = sign_and_send(w3, account, tx)

    logger.debug(f"Transaction sent: {tx_hash}")

    receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout, poll_latency=poll_latency)

    if receipt['status'] != 1:
        raise ValueError(f"Transaction {tx_hash} reverted")

    return receipt


def receipt_hash(receipt) -> Optional[str]:
    """0x-prefixed hash of a receipt"""
    tx_hash = receipt.get('transactionHash')
    return Web3.to_hex(tx_hash) if tx_hash is not None else None
