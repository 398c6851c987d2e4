"""
Shared fixtures
Web3 is mocked, accounts are real Hardhat development keys
"""

import json
import pytest
from unittest.mock import MagicMock
from web3 import Web3
from eth_account import Account

from blockchain.contract_registry import ContractInterface, ContractRegistry
from blockchain.network import NetworkContext

HARDHAT_KEY_0 = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_KEY_1 = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
DEPLOYED_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

TRACKING_ABI = [
    {
        "inputs": [],
        "name": "getProductCount",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "getAnalyticsData",
        "outputs": [
            {"name": "totalProducts", "type": "uint256"},
            {"name": "totalVerifications", "type": "uint256"},
            {"name": "totalEvents", "type": "uint256"},
            {"name": "activeProducts", "type": "uint256"}
        ],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "anonymous": False,
        "inputs": [{"indexed": False, "name": "productId", "type": "string"}],
        "name": "ProductRegistered",
        "type": "event"
    }
]


@pytest.fixture
def account():
    return Account.from_key(HARDHAT_KEY_0)


@pytest.fixture
def w3():
    """Mock Web3 connected to a local chain 31337"""
    mock = MagicMock()
    mock.is_connected.return_value = True
    mock.eth.chain_id = 31337
    mock.eth.gas_price = 1_000_000_000
    mock.eth.get_balance.return_value = 10 ** 18
    mock.eth.get_transaction_count.return_value = 0
    mock.from_wei.side_effect = Web3.from_wei
    mock.eth.wait_for_transaction_receipt.return_value = {
        'status': 1,
        'contractAddress': DEPLOYED_ADDRESS,
        'blockNumber': 1,
        'gasUsed': 1_234_567,
        'transactionHash': b'\x11' * 32
    }
    return mock


@pytest.fixture
def network(w3, account):
    return NetworkContext(w3, "localhost", 31337, [account])


@pytest.fixture
def tracking_interface():
    return ContractInterface(name="Tracking", abi=TRACKING_ABI, bytecode="0x6080604052")


@pytest.fixture
def registry(tracking_interface):
    return ContractRegistry([tracking_interface])


@pytest.fixture
def artifacts_dir(tmp_path):
    """Hardhat-style artifacts tree with one deployable contract"""
    root = tmp_path / "artifacts"
    contract_dir = root / "contracts" / "Tracking.sol"
    contract_dir.mkdir(parents=True)

    (contract_dir / "Tracking.json").write_text(json.dumps({
        "contractName": "Tracking",
        "abi": TRACKING_ABI,
        "bytecode": "0x6080604052"
    }))
    (contract_dir / "Tracking.dbg.json").write_text(json.dumps({"buildInfo": "../build-info/x.json"}))

    interface_dir = root / "contracts" / "ITracking.sol"
    interface_dir.mkdir(parents=True)
    (interface_dir / "ITracking.json").write_text(json.dumps({
        "contractName": "ITracking",
        "abi": [],
        "bytecode": "0x"
    }))

    return root
