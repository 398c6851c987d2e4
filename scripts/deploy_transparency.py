"""
TrackingWithTransparency Deployment
Writes CONTRACT_ADDRESS and LOCALHOST_CONTRACT_ADDRESS to .env
"""

import sys
from dotenv import load_dotenv

from runner.deployment_runner import run_plan
from runner.plans import TRANSPARENCY_PLAN
from utils.logging_config import setup_logging


def main() -> int:
    load_dotenv()
    setup_logging()
    return run_plan(TRANSPARENCY_PLAN)


if __name__ == "__main__":
    sys.exit(main())
