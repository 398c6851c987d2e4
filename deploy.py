"""
Contract Deployment Wrapper
Runs one of the scripts.deploy_* modules (Tracking by default)
"""

import os
import subprocess
import sys

SCRIPTS = {
    "Tracking": "scripts.deploy_tracking",
    "ProductTracking": "scripts.deploy_product_tracking",
    "ShipmentTracker": "scripts.deploy_shipment_tracker",
    "TrackingWithTransparency": "scripts.deploy_transparency",
}

if __name__ == "__main__":
    contract_name = os.getenv("DEPLOY_CONTRACT", "Tracking")

    if contract_name not in SCRIPTS:
        print(f"Unknown contract: {contract_name} (choose from {', '.join(SCRIPTS)})")
        sys.exit(1)

    print("=" * 70)
    print(f"{contract_name} Contract Deployment")
    print("=" * 70)
    print()

    # Run deployment script
    result = subprocess.run(
        [sys.executable, "-m", SCRIPTS[contract_name]],
        cwd="."
    )

    sys.exit(result.returncode)
