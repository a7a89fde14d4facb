"""RewardPool — reward-token custody that the ledgers withdraw from.

Implements TreasuryProtocol. Only the owner funds the pool and manages
claimers; only registered claimers may withdraw. The owner can also pull
funds out in an emergency.
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple

from src.mr_common.errors import (
    ClaimerExistsError,
    ClaimerNotFoundError,
    InsufficientBalanceError,
    InvalidQuantityError,
    NotAuthorizedWithdrawerError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Claimed:
    claimer: str
    recipient: str
    amount: int


class PoolSnapshot(NamedTuple):
    balance: int
    claimers: frozenset[str]
    recipient: str
    paid: int | None


class RewardPool:
    def __init__(self, owner: str) -> None:
        self._owner = owner
        self._balance = 0
        self._claimers: set[str] = set()
        self._payouts: dict[str, int] = {}
        self.events: list[Claimed] = []

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def balance(self) -> int:
        return self._balance

    @property
    def claimers(self) -> frozenset[str]:
        return frozenset(self._claimers)

    def paid_to(self, recipient: str) -> int:
        return self._payouts.get(recipient, 0)

    def deposit(self, caller: str, amount: int) -> int:
        self._require_owner(caller)
        if amount <= 0:
            raise InvalidQuantityError(amount)
        self._balance += amount
        logger.info("Pool deposit: from=%s amount=%d balance=%d", caller, amount, self._balance)
        return self._balance

    def add_claimer(self, caller: str, claimer: str) -> None:
        self._require_owner(caller)
        if claimer in self._claimers:
            raise ClaimerExistsError(claimer)
        self._claimers.add(claimer)

    def remove_claimer(self, caller: str, claimer: str) -> None:
        self._require_owner(caller)
        if claimer not in self._claimers:
            raise ClaimerNotFoundError(claimer)
        self._claimers.remove(claimer)

    def withdraw(self, caller: str, recipient: str, amount: int) -> None:
        if caller not in self._claimers:
            raise NotAuthorizedWithdrawerError(caller)
        self._pay(caller, recipient, amount)

    def emergency_claim(self, caller: str, recipient: str, amount: int) -> None:
        self._require_owner(caller)
        self._pay(caller, recipient, amount)
        logger.warning("Emergency claim: recipient=%s amount=%d", recipient, amount)

    def _pay(self, caller: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise InvalidQuantityError(amount)
        if amount > self._balance:
            raise InsufficientBalanceError(required=amount, available=self._balance)
        self._balance -= amount
        self._payouts[recipient] = self._payouts.get(recipient, 0) + amount
        self.events.append(Claimed(caller, recipient, amount))

    def snapshot(self, recipient: str) -> PoolSnapshot:
        """A command pays at most one recipient; only its payout total is kept."""
        return PoolSnapshot(
            self._balance, frozenset(self._claimers), recipient, self._payouts.get(recipient)
        )

    def restore(self, snapshot: PoolSnapshot) -> None:
        self._balance = snapshot.balance
        self._claimers = set(snapshot.claimers)
        if snapshot.paid is None:
            self._payouts.pop(snapshot.recipient, None)
        else:
            self._payouts[snapshot.recipient] = snapshot.paid

    def _require_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise UnauthorizedError(caller, "manage the reward pool")
