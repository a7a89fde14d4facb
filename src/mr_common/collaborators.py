"""Collaborator Protocols — what the ledgers need from the outside world.

The reward pool (mr_treasury) and the asset registry (mr_assets) provide
in-process implementations; unit tests may inject mocks conforming to these.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, order=True)
class AssetRef:
    """(asset contract, token class) pair identifying a stakable asset."""

    contract: str
    token_class: int

    def __str__(self) -> str:
        return f"{self.contract}#{self.token_class}"


class TreasuryProtocol(Protocol):
    def withdraw(self, caller: str, recipient: str, amount: int) -> None:
        """Pay `amount` to `recipient`.

        Raises NotAuthorizedWithdrawerError / InsufficientBalanceError.
        """
        ...


class AssetRegistryProtocol(Protocol):
    def transfer_in(
        self, participant: str, asset: AssetRef, quantity: int, custodian: str
    ) -> None:
        """Move `quantity` of `asset` from `participant` into `custodian`.

        Raises InsufficientAssetBalanceError / AssetNotApprovedError.
        """
        ...

    def transfer_in_batch(
        self, participant: str, items: Sequence[tuple[AssetRef, int]], custodian: str
    ) -> None:
        """Move several (asset, quantity) pairs at once; nothing moves if any item fails."""
        ...
