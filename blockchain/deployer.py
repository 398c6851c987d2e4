"""
Contract Deployer
Submits a deployment transaction and blocks until it is mined
"""

from dataclasses import dataclass
from typing import Any, Dict, Sequence
from web3 import Web3
from web3.exceptions import TimeExhausted
from loguru import logger

from blockchain.contract_registry import ContractInterface
from blockchain.network import NetworkContext
from blockchain.transactions import build_transaction, sign_and_send
from runner.exceptions import DeploymentTimeout, DeploymentTransactionFailed
from runner.records import is_deployed_address


@dataclass(frozen=True)
class DeployedContract:
    """A mined deployment"""

    interface: ContractInterface
    address: str
    tx_hash: str
    receipt: Dict[str, Any]

    def instance(self, w3: Web3):
        return self.interface.at(w3, self.address)


class ContractDeployer:
    """
    Deploys contracts from the network's first signer

    Confirmation is a single receipt with status 1 from
    wait_for_transaction_receipt. No other confirmation path exists.
    """

    def __init__(
        self,
        network: NetworkContext,
        receipt_timeout: float = 120,
        poll_latency: float = 0.5,
        gas_buffer: float = 1.2,
        default_gas_limit: int = 6_000_000
    ):
        """
        Initialize Contract Deployer

        Args:
            network: Connection and signers
            receipt_timeout: Seconds to wait for the receipt
            poll_latency: Seconds between receipt polls
            gas_buffer: Multiplier on the gas estimate
            default_gas_limit: Gas limit when estimation fails
        """
        self.network = network
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency
        self.gas_buffer = gas_buffer
        self.default_gas_limit = default_gas_limit

    def deploy(self, interface: ContractInterface, constructor_args: Sequence = ()) -> DeployedContract:
        """
        Deploy and wait for one confirmation

        Raises:
            DeploymentTransactionFailed: rejected, reverted or no address in receipt
            DeploymentTimeout: no receipt within receipt_timeout
        """
        w3 = self.network.w3
        account = self.network.deployer

        if not interface.is_deployable:
            raise DeploymentTransactionFailed(f"{interface.name} has no bytecode (abstract or interface?)")

        factory = interface.factory(w3)

        logger.info(f"Building deployment transaction for {interface.name}...")

        try:
            tx = build_transaction(
                w3,
                factory.constructor(*constructor_args),
                account,
                self.network.chain_id,
                gas_buffer=self.gas_buffer,
                default_gas_limit=self.default_gas_limit
            )
            tx_hash = sign_and_send(w3, account, tx)
        except Exception as e:
            raise DeploymentTransactionFailed(f"Deployment of {interface.name} rejected: {e}") from e

        logger.info(f"Transaction sent: {tx_hash}")
        logger.info("Waiting for confirmation...")

        try:
            receipt = w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.receipt_timeout,
                poll_latency=self.poll_latency
            )
        except TimeExhausted as e:
            raise DeploymentTimeout(tx_hash, self.receipt_timeout) from e

        if receipt['status'] != 1:
            raise DeploymentTransactionFailed(f"Deployment of {interface.name} reverted", tx_hash=tx_hash)

        address = receipt.get('contractAddress')
        if not is_deployed_address(address):
            raise DeploymentTransactionFailed(
                f"Receipt for {interface.name} has no contract address", tx_hash=tx_hash
            )

        address = Web3.to_checksum_address(address)

        logger.success(f"{interface.name} deployed to: {address}")
        logger.info(f"Block: {receipt.get('blockNumber')}, gas used: {receipt.get('gasUsed')}")

        return DeployedContract(interface=interface, address=address, tx_hash=tx_hash, receipt=receipt)
