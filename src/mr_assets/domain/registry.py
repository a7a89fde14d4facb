"""AssetRegistry — multi-token balances with operator approvals.

Implements AssetRegistryProtocol. Minting and sales are handled elsewhere;
`credit` is the owner-only entry point that seeds holdings.
"""

import logging
from collections.abc import Iterable, Sequence

from src.mr_common.collaborators import AssetRef
from src.mr_common.errors import (
    AssetNotApprovedError,
    InsufficientAssetBalanceError,
    InvalidQuantityError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

# holder -> (holdings, approved operators); None where the holder had no entry
HoldingsSnapshot = dict[str, tuple[dict[AssetRef, int] | None, frozenset[str] | None]]


class AssetRegistry:
    def __init__(self, owner: str) -> None:
        self._owner = owner
        self._balances: dict[str, dict[AssetRef, int]] = {}
        self._approvals: dict[str, set[str]] = {}  # holder -> operators

    def balance_of(self, holder: str, asset: AssetRef) -> int:
        return self._balances.get(holder, {}).get(asset, 0)

    def is_approved(self, holder: str, operator: str) -> bool:
        return operator in self._approvals.get(holder, ())

    def credit(self, caller: str, holder: str, asset: AssetRef, quantity: int) -> int:
        if caller != self._owner:
            raise UnauthorizedError(caller, "credit assets")
        if quantity <= 0:
            raise InvalidQuantityError(quantity)
        holdings = self._balances.setdefault(holder, {})
        holdings[asset] = holdings.get(asset, 0) + quantity
        return holdings[asset]

    def set_approval(self, holder: str, operator: str, approved: bool) -> None:
        if approved:
            self._approvals.setdefault(holder, set()).add(operator)
        elif holder in self._approvals:
            self._approvals[holder].discard(operator)

    def transfer_in(
        self, participant: str, asset: AssetRef, quantity: int, custodian: str
    ) -> None:
        self.transfer_in_batch(participant, [(asset, quantity)], custodian)

    def transfer_in_batch(
        self, participant: str, items: Sequence[tuple[AssetRef, int]], custodian: str
    ) -> None:
        """Move every (asset, quantity) into custody, or nothing if any item fails."""
        required: dict[AssetRef, int] = {}
        for asset, quantity in items:
            if quantity <= 0:
                raise InvalidQuantityError(quantity)
            required[asset] = required.get(asset, 0) + quantity
        if not self.is_approved(participant, custodian):
            raise AssetNotApprovedError(participant, custodian)
        for asset, quantity in required.items():
            available = self.balance_of(participant, asset)
            if available < quantity:
                raise InsufficientAssetBalanceError(asset, quantity, available)

        holdings = self._balances[participant]
        custody = self._balances.setdefault(custodian, {})
        for asset, quantity in required.items():
            holdings[asset] -= quantity
            custody[asset] = custody.get(asset, 0) + quantity
            logger.debug("Asset %s x%d moved %s -> %s", asset, quantity, participant, custodian)

    def snapshot(self, holders: Iterable[str]) -> HoldingsSnapshot:
        snapshot: HoldingsSnapshot = {}
        for holder in holders:
            balances = self._balances.get(holder)
            approvals = self._approvals.get(holder)
            snapshot[holder] = (
                dict(balances) if balances is not None else None,
                frozenset(approvals) if approvals is not None else None,
            )
        return snapshot

    def restore(self, snapshot: HoldingsSnapshot) -> None:
        for holder, (balances, approvals) in snapshot.items():
            if balances is None:
                self._balances.pop(holder, None)
            else:
                self._balances[holder] = dict(balances)
            if approvals is None:
                self._approvals.pop(holder, None)
            else:
                self._approvals[holder] = set(approvals)
