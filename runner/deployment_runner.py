"""
Deployment Runner
Deploy, confirm, verify and persist a single contract
"""

import os
from typing import Callable, Dict, List, Optional, Sequence
from loguru import logger

from blockchain.contract_registry import ContractRegistry
from blockchain.deployer import ContractDeployer, DeployedContract
from blockchain.network import NetworkContext, load_config_file, load_network_config, DEFAULT_CONFIG_PATH
from runner.exceptions import DeploymentError, FileWriteFailed
from runner.plans import DeploymentPlan
from runner.records import DeploymentRecord, DeploymentTarget
from runner.verification import VerificationCall, VerificationResult, Verifier, registered_data, summarize
from utils.deployment_store import write_deployment_record
from utils.env_file import upsert_env_keys


class DeploymentRunner:
    """
    Sequential deployment workflow for one contract

    Steps 1-5 (connect, resolve, submit, confirm, read address) are fatal
    on failure. Verification and console output never are.
    """

    def __init__(
        self,
        network: NetworkContext,
        registry: ContractRegistry,
        env_path: str = ".env",
        deployments_dir: str = "deployments",
        receipt_timeout: float = 120,
        poll_latency: float = 0.5,
        gas_buffer: float = 1.2,
        default_gas_limit: int = 6_000_000
    ):
        """
        Initialize Deployment Runner

        Args:
            network: Connection, chain id and signers
            registry: Contract name -> compiled interface
            env_path: KEY=VALUE file receiving deployed addresses
            deployments_dir: Directory for JSON deployment records
            receipt_timeout: Seconds to wait for each receipt
            poll_latency: Seconds between receipt polls
        """
        self.network = network
        self.registry = registry
        self.env_path = env_path
        self.deployments_dir = deployments_dir

        self.deployer = ContractDeployer(
            network,
            receipt_timeout=receipt_timeout,
            poll_latency=poll_latency,
            gas_buffer=gas_buffer,
            default_gas_limit=default_gas_limit
        )
        self.verifier = Verifier(network, receipt_timeout=receipt_timeout, poll_latency=poll_latency)

        self.deployment: Optional[DeployedContract] = None
        self.verification_results: List[VerificationResult] = []

    @classmethod
    def from_environment(
        cls,
        network_name: Optional[str] = None,
        config_path: str = DEFAULT_CONFIG_PATH
    ) -> "DeploymentRunner":
        """
        Build a runner from config/networks.json, .env and Hardhat artifacts

        Environment:
            ENV_FILE, DEPLOYMENTS_DIR, ARTIFACTS_DIR, RECEIPT_TIMEOUT
        """
        config = load_config_file(config_path)
        settings = config.get('deployment', {})

        network_config = load_network_config(network_name, config=config)
        network = NetworkContext.from_config(network_config)
        registry = ContractRegistry.from_artifacts()

        return cls(
            network,
            registry,
            env_path=os.getenv('ENV_FILE', '.env'),
            deployments_dir=os.getenv('DEPLOYMENTS_DIR', 'deployments'),
            receipt_timeout=float(os.getenv('RECEIPT_TIMEOUT', settings.get('receipt_timeout_seconds', 120))),
            poll_latency=float(settings.get('poll_latency_seconds', 0.5)),
            gas_buffer=float(settings.get('gas_buffer', 1.2)),
            default_gas_limit=int(settings.get('default_gas_limit', 6_000_000))
        )

    def deploy(
        self,
        contract_name: str,
        constructor_args: Sequence = (),
        verification: Sequence[VerificationCall] = (),
        env_keys: Sequence[str] = (),
        write_record: bool = False,
        version: Optional[str] = None,
        features: Sequence[str] = (),
        test_data: Sequence[str] = (),
        before_verification: Optional[Callable[[DeployedContract], None]] = None
    ) -> DeploymentRecord:
        """
        Deploy contract_name and return its record

        Args:
            contract_name: Registered contract
            constructor_args: Constructor arguments
            verification: Best-effort calls run after confirmation
            env_keys: Keys to upsert with the deployed address
            write_record: Write deployments/<contract>-<network>.json
            test_data: Identifiers recorded when no verification call registers any
            before_verification: Hook run once the contract is confirmed

        Raises:
            DeploymentError: any of steps 1-5 failed, or persistence failed
        """
        logger.info(f"Starting {contract_name} contract deployment...")

        # 1. network and signer
        self.network.ensure_connected()
        account = self.network.deployer
        logger.info(f"Deploying with account: {account.address}")
        self._log_balance(account.address)

        # 2. interface
        interface = self.registry.get(contract_name)
        target = DeploymentTarget(contract_name, self.network.name, self.network.chain_id)

        # 3-5. submit, confirm, read address
        self.deployment = self.deployer.deploy(interface, constructor_args)

        logger.info(f"Network: {target.network_name}")
        logger.info(f"Chain ID: {target.chain_id}")

        contract = self.deployment.instance(self.network.w3)

        if before_verification:
            try:
                before_verification(self.deployment)
            except Exception as e:
                logger.warning(f"Post-deployment hook failed: {e}")

        # 6. verification, never fatal
        self.verification_results = self.verifier.run(contract, verification)

        record = DeploymentRecord.from_receipt(
            target,
            self.deployment.receipt,
            deployer=account.address,
            tx_hash=self.deployment.tx_hash,
            version=version,
            features=tuple(features),
            test_data_registered=registered_data(verification, self.verification_results, test_data)
        )

        # 7. persistence
        failure = self._persist(record, env_keys, write_record)

        # 8. summary
        self._log_summary(record)

        if failure:
            raise failure

        return record

    def deploy_plan(self, plan: DeploymentPlan, **kwargs) -> DeploymentRecord:
        return self.deploy(
            plan.contract_name,
            constructor_args=plan.constructor_args,
            verification=plan.verification,
            env_keys=plan.env_keys,
            write_record=plan.write_record,
            version=plan.version,
            features=plan.features,
            test_data=plan.test_data,
            **kwargs
        )

    def run(self, plan: DeploymentPlan, **kwargs) -> int:
        """
        Deploy a plan and map the outcome to an exit code

        Returns:
            0 when the contract is deployed and persisted, 1 otherwise
        """
        try:
            self.deploy_plan(plan, **kwargs)
        except FileWriteFailed as e:
            logger.error(f"Deployment succeeded but could not be saved: {e}")
            logger.error(f"Contract address: {e.contract_address}")
            return 1
        except DeploymentError as e:
            logger.opt(exception=e).error(f"Deployment failed: {e}")
            return 1
        except Exception as e:
            logger.opt(exception=e).error(f"Deployment failed: {e}")
            return 1

        logger.success("Deployment completed successfully!")
        return 0

    def _log_balance(self, address: str):
        try:
            balance = self.network.get_balance(address)
            logger.info(f"Account balance: {balance} ETH")
        except Exception as e:
            logger.warning(f"Could not read deployer balance: {e}")

    def _persist(
        self,
        record: DeploymentRecord,
        env_keys: Sequence[str],
        write_record: bool
    ) -> Optional[FileWriteFailed]:
        """Write env keys and record file. Returns the first failure, if any."""
        failure = None

        if env_keys:
            values: Dict[str, str] = {key: record.contract_address for key in env_keys}
            try:
                upsert_env_keys(self.env_path, values)
            except OSError as e:
                logger.error(f"Error updating {self.env_path}: {e}")
                failure = FileWriteFailed(self.env_path, record.contract_address, e)

        if write_record:
            try:
                write_deployment_record(self.deployments_dir, record)
            except OSError as e:
                logger.error(f"Error writing deployment record: {e}")
                failure = failure or FileWriteFailed(self.deployments_dir, record.contract_address, e)

        return failure

    def _log_summary(self, record: DeploymentRecord):
        try:
            logger.info("=" * 60)
            logger.info("Summary:")
            for line in record.summary_lines():
                logger.info(f"  {line}")

            if self.verification_results:
                counts = summarize(self.verification_results)
                logger.info(f"  Verification: {counts['passed']} passed, {counts['failed']} failed")
            logger.info("=" * 60)
        except Exception as e:
            logger.warning(f"Could not print summary: {e}")


def run_plan(plan: DeploymentPlan, network_name: Optional[str] = None, **kwargs) -> int:
    """
    Entry point shared by the deployment scripts

    Returns:
        Process exit code
    """
    try:
        runner = DeploymentRunner.from_environment(network_name)
    except (DeploymentError, OSError, ValueError) as e:
        logger.error(f"Deployment setup failed: {e}")
        return 1

    return runner.run(plan, **kwargs)
