"""
Deployment Runner Package
Workflow, verification plans, records and errors
"""

from .exceptions import (
    DeploymentError,
    NetworkConnectionError,
    ContractNotFound,
    DeploymentTransactionFailed,
    DeploymentTimeout,
    VerificationCallFailed,
    FileWriteFailed
)
from .records import DeploymentRecord, DeploymentTarget

__all__ = [
    'DeploymentError',
    'NetworkConnectionError',
    'ContractNotFound',
    'DeploymentTransactionFailed',
    'DeploymentTimeout',
    'VerificationCallFailed',
    'FileWriteFailed',
    'DeploymentRecord',
    'DeploymentTarget'
]
