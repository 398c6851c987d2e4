"""
Deployment Plans
Per-contract verification calls, env keys and record metadata
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
from web3 import Web3
from loguru import logger

from runner.verification import VerificationCall

TRACKING_ENV_KEY = "LOCALHOST_PRODUCT_CONTRACT_ADDRESS"
SHIPMENT_ID = "TRC-TEST-001"
SHIPMENT_STATUS_NAMES = ["Pending", "In Transit", "Delivered"]


@dataclass(frozen=True)
class DeploymentPlan:
    """What to deploy and how to check it"""

    contract_name: str
    constructor_args: Tuple = ()
    verification: Tuple[VerificationCall, ...] = ()
    env_keys: Tuple[str, ...] = ()
    write_record: bool = False
    version: Optional[str] = None
    features: Tuple[str, ...] = ()
    test_data: Tuple[str, ...] = ()
    events: Dict[str, Callable] = field(default_factory=dict)


def _as_list(value) -> List[Any]:
    if isinstance(value, dict):
        return list(value.values())
    return list(value)


def format_analytics(value) -> Dict[str, str]:
    """getAnalyticsData() -> labelled counters"""
    total_products, total_verifications, total_events, active_products = _as_list(value)[:4]
    return {
        'totalProducts': str(total_products),
        'totalVerifications': str(total_verifications),
        'totalEvents': str(total_events),
        'activeProducts': str(active_products),
    }


def format_count(value) -> str:
    return str(value)


def format_local_time(timestamp: int) -> str:
    return datetime.fromtimestamp(int(timestamp)).strftime("%Y-%m-%d %H:%M:%S")


def _register_product(product_id, name, price_eth, quantity, origin, sku):
    return VerificationCall(
        label=f"Register test product {product_id}",
        function_name="registerProduct",
        args=(
            product_id,
            name,
            "Palm Oil",
            sku,
            Web3.to_wei(price_eth, 'ether'),
            quantity,
            origin
        ),
        transact=True,
        registers=product_id
    )


TRACKING_PLAN = DeploymentPlan(
    contract_name="Tracking",
    verification=(
        VerificationCall("Initial product count", "getProductCount", formatter=format_count),
        VerificationCall("Initial analytics data", "getAnalyticsData", formatter=format_analytics),
        _register_product("MYA001", "Sustainable Palm Oil Batch 1", "0.1", 1000, "Johor, Malaysia", "SKU-PALM-0020"),
        VerificationCall(
            "Verify test product MYA001",
            "verifyProduct",
            args=("MYA001", "Kuala Lumpur, Malaysia", 250),
            transact=True
        ),
        _register_product("MYA002", "Sustainable Palm Oil Batch 2", "0.12", 800, "Penang, Malaysia", "SKU-PALM-0021"),
        VerificationCall("Updated analytics", "getAnalyticsData", formatter=format_analytics),
        VerificationCall("Recent products", "getRecentProducts", args=(5,)),
    ),
    env_keys=(TRACKING_ENV_KEY,),
    write_record=True,
    version="Enhanced for Analytics",
    features=(
        "Product Registration",
        "Location Tracking",
        "Ownership Transfer",
        "Verification Events",
        "Analytics Support",
        "Real-time Data",
    ),
)


PRODUCT_TRACKING_PLAN = DeploymentPlan(
    contract_name="ProductTracking",
    verification=(
        VerificationCall("Product count", "getProductCount", formatter=format_count),
    ),
    env_keys=(TRACKING_ENV_KEY,),
)


TRANSPARENCY_PLAN = DeploymentPlan(
    contract_name="TrackingWithTransparency",
    verification=(
        VerificationCall("Contract info", "getContractInfo"),
        VerificationCall("Global transparency metrics", "getGlobalTransparencyMetrics"),
    ),
    env_keys=("CONTRACT_ADDRESS", "LOCALHOST_CONTRACT_ADDRESS"),
)


SIMPLE_PLAN = DeploymentPlan(contract_name="Tracking")


def on_shipment_created(event):
    args = event['args']
    logger.info("Notification - Shipment Created:")
    logger.info(f"   Shipment ID: {args['shipmentId']}")
    logger.info(f"   Product: {args['productName']} ({args['productId']})")
    logger.info(f"   Route: {args['fromLocation']} -> {args['toLocation']}")
    logger.info(f"   Quantity: {args['quantity']} MT")
    logger.info(f"   Owner: {args['owner']}")


def on_status_changed(event):
    args = event['args']
    status = args['status']
    status_name = SHIPMENT_STATUS_NAMES[status] if status < len(SHIPMENT_STATUS_NAMES) else str(status)
    logger.info("Notification - Status Update:")
    logger.info(f"   Shipment ID: {args['shipmentId']}")
    logger.info(f"   Product ID: {args['productId']}")
    logger.info(f"   New Status: {status_name}")
    logger.info(f"   Location: {args['location']}")
    logger.info(f"   Timestamp: {format_local_time(args['timestamp'])}")


def on_in_transit(event):
    args = event['args']
    logger.info("Notification - In Transit:")
    logger.info(f"   Shipment ID: {args['shipmentId']}")
    logger.info(f"   Product ID: {args['productId']}")
    logger.info(f"   Current Location: {args['currentLocation']}")
    logger.info(f"   Time: {format_local_time(args['timestamp'])}")


def on_delivered(event):
    args = event['args']
    logger.info("Notification - Delivered:")
    logger.info(f"   Shipment ID: {args['shipmentId']}")
    logger.info(f"   Product ID: {args['productId']}")
    logger.info(f"   Delivered to: {args['deliveryLocation']}")
    logger.info(f"   Delivery Time: {format_local_time(args['deliveryTime'])}")
    logger.info(f"   Recipient: {args['recipient']}")


SHIPMENT_TRACKER_PLAN = DeploymentPlan(
    contract_name="ShipmentTracker",
    verification=(
        VerificationCall(
            f"Create test shipment {SHIPMENT_ID}",
            "createShipment",
            args=lambda network: (
                SHIPMENT_ID,
                "MYA001",
                "Premium Palm Oil",
                "Malaysia Oil Palm Plantation",
                "Singapore Distribution Center",
                10,
                network.deployer.address
            ),
            transact=True
        ),
        VerificationCall(
            "Start transit",
            "startTransit",
            args=(SHIPMENT_ID, "Port Klang, Malaysia"),
            transact=True,
            pause_after=2
        ),
        VerificationCall(
            "Update location",
            "updateLocation",
            args=(SHIPMENT_ID, "Strait of Malacca"),
            transact=True,
            pause_after=2
        ),
        VerificationCall(
            "Complete delivery",
            "completeDelivery",
            args=(SHIPMENT_ID, "Singapore Distribution Center"),
            transact=True
        ),
    ),
    events={
        "ShipmentCreated": on_shipment_created,
        "ShipmentStatusChanged": on_status_changed,
        "ShipmentInTransit": on_in_transit,
        "ShipmentDelivered": on_delivered,
    },
)


PLANS = {
    plan.contract_name: plan
    for plan in (TRACKING_PLAN, PRODUCT_TRACKING_PLAN, TRANSPARENCY_PLAN, SHIPMENT_TRACKER_PLAN)
}
