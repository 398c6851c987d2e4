"""
Signer Balance Check
Shows the balances of the configured signers on the active network
"""

import sys
from dotenv import load_dotenv
from loguru import logger

from blockchain.network import NetworkContext, load_network_config
from runner.exceptions import DeploymentError
from utils.balances import signer_balances
from utils.logging_config import setup_logging


def main() -> int:
    load_dotenv()
    setup_logging(log_file=None)

    try:
        network = NetworkContext.from_config(load_network_config())
        network.ensure_connected()
        balances = signer_balances(network)
    except (DeploymentError, OSError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1

    logger.info(f"Checking balances on {network.name} network...")

    for entry in balances:
        logger.info(f"Account #{entry.index}: {entry.address}")
        logger.info(f"   Balance: {entry.balance} ETH")

        if entry.status == "empty":
            logger.warning("   No funds! Fund this address before deploying.")
        elif entry.status == "low":
            logger.warning("   Low balance! Consider adding more funds.")
        else:
            logger.success("   Good balance for deployment.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
