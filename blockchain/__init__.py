"""
Blockchain Interaction Package
Network connection, contract interfaces, deployment and event subscriptions
"""

from .contract_registry import ContractInterface, ContractRegistry
from .network import NetworkConfig, NetworkContext, load_network_config
from .deployer import ContractDeployer, DeployedContract
from .event_listener import EventListener, EventSubscription

__all__ = [
    'ContractInterface',
    'ContractRegistry',
    'NetworkConfig',
    'NetworkContext',
    'load_network_config',
    'ContractDeployer',
    'DeployedContract',
    'EventListener',
    'EventSubscription'
]
