"""
Deployment Errors
Fatal errors abort the run with exit code 1, verification errors are only logged
"""

from typing import Optional


class DeploymentError(Exception):
    """Base exception for deployment failures"""

    pass


class NetworkConnectionError(DeploymentError, ConnectionError):
    """Raised when the RPC endpoint is unreachable or no signer is configured"""

    pass


class ContractNotFound(DeploymentError, KeyError):
    """Raised when no compiled interface is registered under a contract name"""

    def __init__(self, contract_name: str):
        self.contract_name = contract_name
        super().__init__(contract_name)

    def __str__(self):
        return f"Contract interface not found: {self.contract_name}"


class DeploymentTransactionFailed(DeploymentError):
    """Raised when the deployment transaction is rejected or reverts"""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class DeploymentTimeout(DeploymentError, TimeoutError):
    """Raised when no receipt arrives for the deployment transaction"""

    def __init__(self, tx_hash: str, timeout: float):
        self.tx_hash = tx_hash
        self.timeout = timeout
        super().__init__(f"No receipt for {tx_hash} after {timeout}s")


class VerificationCallFailed(DeploymentError):
    """Post-deployment check failed. Never fatal."""

    def __init__(self, label: str, cause: Exception):
        self.label = label
        self.cause = cause
        super().__init__(f"{label}: {cause}")


class FileWriteFailed(DeploymentError, OSError):
    """Raised when the contract deployed but its address could not be persisted"""

    def __init__(self, path: str, contract_address: str, cause: Exception):
        self.path = path
        self.contract_address = contract_address
        self.cause = cause
        super().__init__(
            f"Could not write {path} (contract is deployed at {contract_address}): {cause}"
        )
