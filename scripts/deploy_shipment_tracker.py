"""
ShipmentTracker Deployment
Deploys ShipmentTracker, walks a test shipment through its lifecycle and
keeps listening for shipment events until interrupted
"""

import os
import sys
import signal
import asyncio
from dotenv import load_dotenv
from loguru import logger

from blockchain.event_listener import EventListener
from runner.deployment_runner import DeploymentRunner
from runner.exceptions import DeploymentError
from runner.plans import SHIPMENT_TRACKER_PLAN
from utils.logging_config import setup_logging


def subscribe_events(listener: EventListener, w3, deployment):
    """Subscribe every shipment event handler to the new contract"""
    contract = deployment.instance(w3)

    for event_name, handler in SHIPMENT_TRACKER_PLAN.events.items():
        listener.subscribe(contract, event_name, handler)

    logger.info(f"Subscribed to {len(SHIPMENT_TRACKER_PLAN.events)} shipment events")


def main() -> int:
    load_dotenv()
    setup_logging()

    try:
        runner = DeploymentRunner.from_environment()
    except (DeploymentError, OSError, ValueError) as e:
        logger.error(f"Deployment setup failed: {e}")
        return 1

    w3 = runner.network.w3
    listener = EventListener(w3, poll_interval=float(os.getenv('EVENT_POLL_INTERVAL', '2')))

    exit_code = runner.run(
        SHIPMENT_TRACKER_PLAN,
        before_verification=lambda deployment: subscribe_events(listener, w3, deployment)
    )

    if exit_code != 0:
        listener.unsubscribe_all()
        return exit_code

    duration = os.getenv('LISTEN_SECONDS')

    def _signal_handler(signum, frame):
        logger.info(f"Received signal {signum}")
        listener.stop()

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    logger.info("Monitoring events, press Ctrl+C to stop")

    asyncio.run(listener.listen(float(duration) if duration else None))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
