"""
Verification Call Tests
"""

import pytest
from unittest.mock import MagicMock, patch

from runner.plans import SHIPMENT_TRACKER_PLAN, TRACKING_PLAN, format_analytics, on_status_changed
from runner.verification import VerificationCall, VerificationResult, Verifier, named_outputs, registered_data, summarize

from conftest import TRACKING_ABI


@pytest.fixture
def contract():
    mock = MagicMock()
    mock.abi = TRACKING_ABI
    mock.functions.getProductCount.return_value.call.return_value = 0
    mock.functions.getAnalyticsData.return_value.call.return_value = (2, 1, 3, 2)
    return mock


@pytest.fixture
def verifier(network):
    return Verifier(network, receipt_timeout=5, poll_latency=0)


class TestVerifier:

    def test_read_calls(self, verifier, contract):
        results = verifier.run(contract, [
            VerificationCall("count", "getProductCount"),
            VerificationCall("analytics", "getAnalyticsData"),
        ])

        assert [result.ok for result in results] == [True, True]
        assert results[0].value == 0
        assert results[1].value == {
            'totalProducts': 2,
            'totalVerifications': 1,
            'totalEvents': 3,
            'activeProducts': 2
        }

    def test_failure_does_not_stop_later_calls(self, verifier, contract):
        contract.functions.getProductCount.return_value.call.side_effect = Exception("execution reverted")

        results = verifier.run(contract, [
            VerificationCall("count", "getProductCount"),
            VerificationCall("analytics", "getAnalyticsData", formatter=format_analytics),
        ])

        assert results[0].ok is False
        assert "execution reverted" in results[0].error
        assert results[1].ok is True
        assert results[1].value['totalEvents'] == "3"
        assert summarize(results) == {'passed': 1, 'failed': 1}

    def test_transact_call(self, verifier, contract, network):
        receipt = {'status': 1, 'transactionHash': b'\x01' * 32}

        with patch('runner.verification.send_contract_call', return_value=receipt) as send:
            results = verifier.run(contract, [
                VerificationCall("verify", "verifyProduct", args=("MYA001", "Kuala Lumpur, Malaysia", 250), transact=True)
            ])

        assert results[0].ok
        assert results[0].value == "0x" + "01" * 32
        contract.functions.verifyProduct.assert_called_once_with("MYA001", "Kuala Lumpur, Malaysia", 250)
        assert send.call_args.args[2] is network.deployer

    def test_callable_args(self, verifier, contract, network):
        with patch('runner.verification.send_contract_call', return_value={'transactionHash': b'\x02' * 32}):
            verifier.run(contract, SHIPMENT_TRACKER_PLAN.verification[:1])

        args = contract.functions.createShipment.call_args.args
        assert args[0] == "TRC-TEST-001"
        assert args[-1] == network.deployer.address

    def test_no_calls(self, verifier, contract):
        assert verifier.run(contract, []) == []


class TestNamedOutputs:

    def test_unnamed_single_output(self, contract):
        assert named_outputs(contract, "getProductCount", 5) == 5

    def test_struct_output(self):
        contract = MagicMock()
        contract.abi = [{
            "type": "function",
            "name": "getContractInfo",
            "outputs": [{
                "name": "",
                "type": "tuple",
                "components": [
                    {"name": "version", "type": "string"},
                    {"name": "features", "type": "string"},
                    {"name": "description", "type": "string"}
                ]
            }]
        }]

        value = named_outputs(contract, "getContractInfo", ("2.0", "transparency", "demo"))

        assert value == {'version': "2.0", 'features': "transparency", 'description': "demo"}

    def test_unknown_function(self, contract):
        assert named_outputs(contract, "missing", (1, 2)) == (1, 2)

    def test_single_array_output_left_as_list(self):
        contract = MagicMock()
        contract.abi = [{
            "type": "function",
            "name": "getRecentProducts",
            "outputs": [{"name": "", "type": "string[]"}]
        }]

        assert named_outputs(contract, "getRecentProducts", ["MYA002"]) == ["MYA002"]
        assert named_outputs(contract, "getRecentProducts", ["MYA001", "MYA002"]) == ["MYA001", "MYA002"]


class TestRegisteredData:

    def test_only_successful_registrations(self):
        calls = [
            VerificationCall("count", "getProductCount"),
            VerificationCall("register 1", "registerProduct", transact=True, registers="MYA001"),
            VerificationCall("register 2", "registerProduct", transact=True, registers="MYA002"),
        ]
        results = [
            VerificationResult("count", ok=True, value=0),
            VerificationResult("register 1", ok=True),
            VerificationResult("register 2", ok=False, error="reverted"),
        ]

        assert registered_data(calls, results, default=("X",)) == ("MYA001",)

    def test_default_without_registering_calls(self):
        calls = [VerificationCall("count", "getProductCount")]
        results = [VerificationResult("count", ok=True, value=0)]

        assert registered_data(calls, results, default=("MYA001",)) == ("MYA001",)


class TestPlans:

    def test_tracking_plan(self):
        assert TRACKING_PLAN.env_keys == ("LOCALHOST_PRODUCT_CONTRACT_ADDRESS",)
        assert TRACKING_PLAN.write_record
        assert [call.registers for call in TRACKING_PLAN.verification if call.registers] == ["MYA001", "MYA002"]
        assert [call.function_name for call in TRACKING_PLAN.verification] == [
            "getProductCount",
            "getAnalyticsData",
            "registerProduct",
            "verifyProduct",
            "registerProduct",
            "getAnalyticsData",
            "getRecentProducts",
        ]

    def test_register_product_price_in_wei(self):
        register = TRACKING_PLAN.verification[2]

        assert register.args[0] == "MYA001"
        assert register.args[4] == 10 ** 17

    def test_status_handler(self):
        event = {'args': {
            'shipmentId': "TRC-TEST-001",
            'productId': "MYA001",
            'status': 1,
            'location': "Port Klang, Malaysia",
            'timestamp': 1700000000
        }}

        on_status_changed(event)
