"""
Post-Deployment Verification
Best-effort calls against a fresh deployment. Failures are logged, never raised.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union
from loguru import logger

from blockchain.network import NetworkContext
from blockchain.transactions import receipt_hash, send_contract_call
from runner.exceptions import VerificationCallFailed

ArgsSpec = Union[Tuple, Callable[[NetworkContext], Tuple]]


@dataclass(frozen=True)
class VerificationCall:
    """
    One read or write against the deployed contract

    args may be a callable taking the NetworkContext, for arguments that
    depend on the signer (e.g. a recipient address). registers names the
    test identifier a successful call creates on chain.
    """

    label: str
    function_name: str
    args: ArgsSpec = ()
    transact: bool = False
    formatter: Optional[Callable[[Any], Any]] = None
    value: int = 0
    pause_after: float = 0
    registers: Optional[str] = None

    def resolve_args(self, network: NetworkContext) -> Tuple:
        if callable(self.args):
            return tuple(self.args(network))
        return tuple(self.args)


@dataclass(frozen=True)
class VerificationResult:
    label: str
    ok: bool
    value: Any = None
    error: Optional[str] = None


def named_outputs(contract, function_name: str, value: Any) -> Any:
    """Pair a multi-value return with the output names from the ABI"""
    if not isinstance(value, (tuple, list)):
        return value

    for item in contract.abi:
        if item.get('type') == 'function' and item.get('name') == function_name:
            outputs = item.get('outputs', [])

            if len(outputs) == 1:
                # a single struct comes back as the tuple of its components,
                # any other single output (e.g. an array) is left as is
                components = outputs[0].get('components')
                if not components:
                    return value
                outputs = components

            names = [output.get('name') or f"[{i}]" for i, output in enumerate(outputs)]

            if len(names) == len(value):
                return dict(zip(names, value))

    return value


class Verifier:
    """
    Runs verification calls in order

    Every call is attempted even if an earlier one failed.
    """

    def __init__(self, network: NetworkContext, receipt_timeout: float = 120, poll_latency: float = 0.5):
        self.network = network
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

    def run(self, contract, calls: Sequence[VerificationCall]) -> List[VerificationResult]:
        """
        Execute each call against contract

        Returns:
            One result per call, in order
        """
        results = []

        if not calls:
            return results

        logger.info("Testing deployed contract...")

        for call in calls:
            try:
                value = self._execute(contract, call)
            except Exception as e:
                failure = VerificationCallFailed(call.label, e)
                logger.warning(f"Contract test failed - {failure}")
                results.append(VerificationResult(label=call.label, ok=False, error=str(e)))
            else:
                logger.success(f"{call.label}: {value}")
                results.append(VerificationResult(label=call.label, ok=True, value=value))

            if call.pause_after:
                time.sleep(call.pause_after)

        passed = sum(1 for result in results if result.ok)

        if passed == len(results):
            logger.success(f"Contract test successful ({passed}/{len(results)} checks)")
        else:
            logger.warning(f"Contract test finished with failures ({passed}/{len(results)} checks passed)")

        return results

    def _execute(self, contract, call: VerificationCall) -> Any:
        function = getattr(contract.functions, call.function_name)
        args = call.resolve_args(self.network)

        if call.transact:
            receipt = send_contract_call(
                self.network.w3,
                function(*args),
                self.network.deployer,
                self.network.chain_id,
                timeout=self.receipt_timeout,
                poll_latency=self.poll_latency,
                value=call.value
            )
            value = receipt_hash(receipt)
        else:
            value = function(*args).call()
            value = named_outputs(contract, call.function_name, value)

        if call.formatter:
            value = call.formatter(value)

        return value


def summarize(results: Sequence[VerificationResult]) -> Dict[str, int]:
    return {
        'passed': sum(1 for result in results if result.ok),
        'failed': sum(1 for result in results if not result.ok),
    }


def registered_data(
    calls: Sequence[VerificationCall],
    results: Sequence[VerificationResult],
    default: Sequence[str] = ()
) -> Tuple[str, ...]:
    """
    Identifiers actually created by the verification calls

    Falls back to default when no call registers anything.
    """
    registering = [(call, result) for call, result in zip(calls, results) if call.registers]

    if not registering:
        return tuple(default)

    return tuple(call.registers for call, result in registering if result.ok)
