"""
Utilities Package
Env file updates, deployment records, logging and balance checks
"""

from .env_file import upsert_env_keys
from .deployment_store import write_deployment_record, read_deployment_record
from .logging_config import setup_logging

__all__ = [
    'upsert_env_keys',
    'write_deployment_record',
    'read_deployment_record',
    'setup_logging'
]
