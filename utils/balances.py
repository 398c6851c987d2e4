"""
Balance Report
Native balances of the configured signers
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List

from blockchain.network import NetworkContext

LOW_BALANCE_ETH = Decimal("0.01")


@dataclass(frozen=True)
class SignerBalance:
    index: int
    address: str
    balance: Decimal

    @property
    def status(self) -> str:
        if self.balance == 0:
            return "empty"
        if self.balance < LOW_BALANCE_ETH:
            return "low"
        return "ok"


def signer_balances(network: NetworkContext, limit: int = 5) -> List[SignerBalance]:
    """Balances of the first `limit` signers"""
    return [
        SignerBalance(index=i, address=account.address, balance=network.get_balance(account.address))
        for i, account in enumerate(network.accounts[:limit])
    ]
