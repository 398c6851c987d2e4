"""
Deployment Record Tests
"""

import json
import pytest
from web3 import Web3

from runner.records import DeploymentRecord, DeploymentTarget, ZERO_ADDRESS, is_deployed_address
from utils.deployment_store import contract_slug, read_deployment_record, record_path, write_deployment_record

ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
SECOND_ADDRESS = "0xe7f1725e7734ce288f8367e1bb143e90bb3f0512"
DEPLOYER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture
def target():
    return DeploymentTarget(contract_name="Tracking", network_name="localhost", chain_id=31337)


@pytest.fixture
def record(target):
    return DeploymentRecord.from_receipt(
        target,
        {'status': 1, 'contractAddress': ADDRESS.lower(), 'blockNumber': 3, 'gasUsed': 900000},
        deployer=DEPLOYER,
        tx_hash="0x" + "ab" * 32,
        version="Enhanced for Analytics",
        test_data_registered=("MYA001", "MYA002")
    )


class TestDeploymentRecord:

    def test_from_receipt(self, record):
        assert record.contract_address == ADDRESS
        assert record.network == "localhost"
        assert record.chain_id == "31337"
        assert record.block_number == 3

    def test_rejects_failed_receipt(self, target):
        with pytest.raises(ValueError):
            DeploymentRecord.from_receipt(
                target, {'status': 0, 'contractAddress': ADDRESS}, deployer=DEPLOYER, tx_hash="0x1"
            )

    def test_rejects_zero_address(self):
        with pytest.raises(ValueError):
            DeploymentRecord(
                contract_address=ZERO_ADDRESS,
                network="localhost",
                chain_id="31337",
                deployer=DEPLOYER,
                contract_name="Tracking"
            )

    def test_json_shape(self, record):
        data = record.to_json_dict()

        assert data["contractAddress"] == ADDRESS
        assert data["chainId"] == "31337"
        assert data["contractName"] == "Tracking"
        assert data["version"] == "Enhanced for Analytics"
        assert data["testProductsRegistered"] == ["MYA001", "MYA002"]
        assert data["features"] == []
        assert data["deploymentTime"].endswith("+00:00")

    @pytest.mark.parametrize("address,expected", [
        (ADDRESS, True),
        (ADDRESS.lower(), True),
        (ZERO_ADDRESS, False),
        ("0x1234", False),
        (None, False),
    ])
    def test_is_deployed_address(self, address, expected):
        assert is_deployed_address(address) is expected


class TestDeploymentStore:

    @pytest.mark.parametrize("name,slug", [
        ("Tracking", "tracking"),
        ("ProductTracking", "product-tracking"),
        ("TrackingWithTransparency", "tracking-with-transparency"),
    ])
    def test_contract_slug(self, name, slug):
        assert contract_slug(name) == slug

    def test_creates_missing_directory(self, tmp_path, record):
        directory = tmp_path / "a" / "b" / "deployments"

        path = write_deployment_record(str(directory), record)

        assert path == record_path(str(directory), "Tracking", "localhost")
        assert path.endswith("tracking-localhost.json")
        with open(path) as f:
            assert json.load(f)["contractAddress"] == ADDRESS

    def test_overwrites_previous_record(self, tmp_path, record, target):
        write_deployment_record(str(tmp_path), record)

        newer = DeploymentRecord.from_receipt(
            target,
            {'status': 1, 'contractAddress': SECOND_ADDRESS},
            deployer=DEPLOYER,
            tx_hash="0x2"
        )
        write_deployment_record(str(tmp_path), newer)

        data = read_deployment_record(str(tmp_path), "Tracking", "localhost")
        assert data["contractAddress"] == Web3.to_checksum_address(SECOND_ADDRESS)

    def test_read_missing_record(self, tmp_path):
        assert read_deployment_record(str(tmp_path), "Tracking", "sepolia") is None
