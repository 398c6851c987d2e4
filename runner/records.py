"""
Deployment Data Model
Targets are read from static configuration, records are produced once per confirmed deployment
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def is_deployed_address(address: Optional[str]) -> bool:
    """True for a well-formed account address other than the zero address"""
    if not address or not Web3.is_address(address):
        return False
    return Web3.to_checksum_address(address) != ZERO_ADDRESS


@dataclass(frozen=True)
class DeploymentTarget:
    """Contract to deploy and where"""

    contract_name: str
    network_name: str
    chain_id: int


@dataclass(frozen=True)
class DeploymentRecord:
    """
    Outcome of a confirmed deployment

    Only built from a successful receipt, so contract_address always
    points at mined code.
    """

    contract_address: str
    network: str
    chain_id: str
    deployer: str
    contract_name: str
    deployment_time: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    )
    version: Optional[str] = None
    test_data_registered: Tuple[str, ...] = ()
    features: Tuple[str, ...] = ()
    transaction_hash: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[int] = None

    def __post_init__(self):
        if not is_deployed_address(self.contract_address):
            raise ValueError(f"Invalid contract address: {self.contract_address!r}")

    @classmethod
    def from_receipt(
        cls,
        target: DeploymentTarget,
        receipt: Dict[str, Any],
        deployer: str,
        tx_hash: str,
        **extra
    ) -> "DeploymentRecord":
        """Build a record from a mined deployment receipt"""
        if receipt.get("status") != 1:
            raise ValueError("Deployment receipt does not report success")

        return cls(
            contract_address=Web3.to_checksum_address(receipt["contractAddress"]),
            network=target.network_name,
            chain_id=str(target.chain_id),
            deployer=deployer,
            contract_name=target.contract_name,
            transaction_hash=tx_hash,
            block_number=receipt.get("blockNumber"),
            gas_used=receipt.get("gasUsed"),
            **extra
        )

    def to_json_dict(self) -> Dict[str, Any]:
        """Shape written to deployments/<contract>-<network>.json"""
        data = {
            "contractAddress": self.contract_address,
            "network": self.network,
            "chainId": self.chain_id,
            "deploymentTime": self.deployment_time,
            "deployer": self.deployer,
            "contractName": self.contract_name,
        }

        if self.version is not None:
            data["version"] = self.version

        data["testProductsRegistered"] = list(self.test_data_registered)
        data["features"] = list(self.features)

        if self.transaction_hash is not None:
            data["transactionHash"] = self.transaction_hash
        if self.block_number is not None:
            data["blockNumber"] = self.block_number
        if self.gas_used is not None:
            data["gasUsed"] = self.gas_used

        return data

    def summary_lines(self) -> List[str]:
        """Human-readable summary for the console"""
        lines = [
            f"Contract: {self.contract_name}",
            f"Contract Address: {self.contract_address}",
            f"Network: {self.network}",
            f"Chain ID: {self.chain_id}",
            f"Deployer: {self.deployer}",
        ]
        if self.transaction_hash:
            lines.append(f"Transaction: {self.transaction_hash}")
        if self.test_data_registered:
            lines.append(f"Test data: {', '.join(self.test_data_registered)} registered")
        return lines
