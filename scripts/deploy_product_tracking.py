"""
ProductTracking Deployment
"""

import sys
from dotenv import load_dotenv

from runner.deployment_runner import run_plan
from runner.plans import PRODUCT_TRACKING_PLAN
from utils.logging_config import setup_logging


def main() -> int:
    load_dotenv()
    setup_logging()
    return run_plan(PRODUCT_TRACKING_PLAN)


if __name__ == "__main__":
    sys.exit(main())
