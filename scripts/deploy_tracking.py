"""
Tracking Deployment
Deploys Tracking, registers two test products and saves the deployment record
"""

import sys
from dotenv import load_dotenv

from runner.deployment_runner import run_plan
from runner.plans import TRACKING_PLAN
from utils.logging_config import setup_logging


def main() -> int:
    load_dotenv()
    setup_logging()
    return run_plan(TRACKING_PLAN)


if __name__ == "__main__":
    sys.exit(main())
