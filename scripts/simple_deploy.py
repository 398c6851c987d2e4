"""
Simple Deployment Test
Deploys Tracking with no checks and no files written
"""

import sys
from dotenv import load_dotenv

from runner.deployment_runner import run_plan
from runner.plans import SIMPLE_PLAN
from utils.logging_config import setup_logging


def main() -> int:
    load_dotenv()
    setup_logging(log_file=None)
    return run_plan(SIMPLE_PLAN)


if __name__ == "__main__":
    sys.exit(main())
