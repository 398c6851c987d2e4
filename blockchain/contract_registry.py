"""
Contract Registry
Maps contract names to compiled interfaces (ABI + bytecode)
"""

import os
import json
from dataclasses import dataclass
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from runner.exceptions import ContractNotFound

DEFAULT_ARTIFACTS_DIR = "artifacts"


@dataclass(frozen=True)
class ContractInterface:
    """Compiled contract: constructor, functions and events"""

    name: str
    abi: List[Dict]
    bytecode: str

    @property
    def function_names(self) -> List[str]:
        return [item['name'] for item in self.abi if item.get('type') == 'function']

    @property
    def event_names(self) -> List[str]:
        return [item['name'] for item in self.abi if item.get('type') == 'event']

    @property
    def is_deployable(self) -> bool:
        return bool(self.bytecode) and self.bytecode not in ('0x', '0x0')

    def factory(self, w3: Web3):
        """Contract factory for deployment"""
        return w3.eth.contract(abi=self.abi, bytecode=self.bytecode)

    def at(self, w3: Web3, address: str):
        """Contract instance bound to a deployed address"""
        return w3.eth.contract(address=Web3.to_checksum_address(address), abi=self.abi)


def load_artifact(path: str) -> ContractInterface:
    """
    Load a Hardhat artifact JSON

    Args:
        path: artifacts/contracts/<Name>.sol/<Name>.json

    Returns:
        ContractInterface
    """
    with open(path, 'r') as f:
        artifact = json.load(f)

    name = artifact.get('contractName') or os.path.splitext(os.path.basename(path))[0]

    bytecode = artifact.get('bytecode', '')
    if isinstance(bytecode, dict):
        # solc standard JSON output shape
        bytecode = bytecode.get('object', '')
    if bytecode and not bytecode.startswith('0x'):
        bytecode = '0x' + bytecode

    return ContractInterface(name=name, abi=artifact['abi'], bytecode=bytecode)


class ContractRegistry:
    """
    Explicit name -> interface mapping

    Interfaces are registered directly or discovered from a Hardhat
    artifacts directory.
    """

    def __init__(self, interfaces: Optional[List[ContractInterface]] = None):
        self._interfaces: Dict[str, ContractInterface] = {}

        for interface in interfaces or []:
            self.register(interface)

    def register(self, interface: ContractInterface):
        """Add or replace an interface"""
        self._interfaces[interface.name] = interface
        logger.debug(f"Registered contract interface: {interface.name}")

    def get(self, name: str) -> ContractInterface:
        """
        Look up a contract by name

        Raises:
            ContractNotFound: nothing registered under that name
        """
        try:
            return self._interfaces[name]
        except KeyError:
            raise ContractNotFound(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._interfaces

    def __len__(self) -> int:
        return len(self._interfaces)

    def names(self) -> List[str]:
        return sorted(self._interfaces)

    @classmethod
    def from_artifacts(cls, artifacts_dir: Optional[str] = None) -> "ContractRegistry":
        """
        Discover every compiled contract under artifacts/contracts

        Debug files (*.dbg.json) and interfaces without bytecode are skipped.
        """
        artifacts_dir = artifacts_dir or os.getenv('ARTIFACTS_DIR', DEFAULT_ARTIFACTS_DIR)
        contracts_dir = os.path.join(artifacts_dir, 'contracts')
        registry = cls()

        if not os.path.isdir(contracts_dir):
            logger.warning(f"Artifacts directory not found: {contracts_dir}")
            logger.info("Run 'npx hardhat compile' first")
            return registry

        for root, _dirs, files in os.walk(contracts_dir):
            for filename in sorted(files):
                if not filename.endswith('.json') or filename.endswith('.dbg.json'):
                    continue

                path = os.path.join(root, filename)

                try:
                    interface = load_artifact(path)
                except (ValueError, KeyError) as e:
                    logger.warning(f"Skipping unreadable artifact {path}: {e}")
                    continue

                if interface.is_deployable:
                    registry.register(interface)

        logger.info(f"Loaded {len(registry)} contract interfaces from {contracts_dir}")
        return registry
