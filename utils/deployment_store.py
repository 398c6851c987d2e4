"""
Deployment Store
Writes JSON deployment records, one file per contract and network
"""

import os
import re
import json
from typing import Dict, Optional
from loguru import logger

from runner.records import DeploymentRecord


def contract_slug(contract_name: str) -> str:
    """ShipmentTracker -> shipment-tracker"""
    slug = re.sub(r'(?<=[a-z0-9])(?=[A-Z])', '-', contract_name)
    return slug.replace('_', '-').lower()


def record_path(directory: str, contract_name: str, network: str) -> str:
    """Path of the record file for a contract on a network"""
    return os.path.join(directory, f"{contract_slug(contract_name)}-{network}.json")


def write_deployment_record(directory: str, record: DeploymentRecord) -> str:
    """
    Write a deployment record, overwriting the previous one for that network

    Args:
        directory: Deployments directory (created recursively if missing)
        record: Confirmed deployment

    Returns:
        Path of the written file
    """
    os.makedirs(directory, exist_ok=True)

    path = record_path(directory, record.contract_name, record.network)

    with open(path, 'w') as f:
        json.dump(record.to_json_dict(), f, indent=2)
        f.write('\n')

    logger.success(f"Deployment info saved to: {path}")
    return path


def read_deployment_record(directory: str, contract_name: str, network: str) -> Optional[Dict]:
    """Load a previously written record, None if there is none"""
    path = record_path(directory, contract_name, network)

    if not os.path.exists(path):
        return None

    with open(path, 'r') as f:
        return json.load(f)
