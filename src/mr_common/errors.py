"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Roles
  2xxx: Output-factor schedule
  3xxx: Staking positions
  4xxx: Flat (free) mining
  5xxx: Treasury / Assets
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/Roles ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired token", 401)


class UnauthorizedError(AppError):
    def __init__(self, caller: str, action: str) -> None:
        super().__init__(1002, f"Caller {caller} is not allowed to {action}", 403)


# --- 2xxx: Schedule ---

class DuplicateRateError(AppError):
    def __init__(self, rate: int) -> None:
        super().__init__(2001, f"The output factor is the same: {rate}", 422)


class NothingPendingError(AppError):
    def __init__(self) -> None:
        super().__init__(2002, "The future output factor does not exist", 422)


class InvalidScheduleError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2003, f"Invalid schedule: {detail}", 422)


class NoRecordsError(AppError):
    def __init__(self) -> None:
        super().__init__(2004, "No output factor records", 500)


class RecordOutOfRangeError(AppError):
    def __init__(self, index: int, occurred: int) -> None:
        super().__init__(
            2005, f"Record index {index} out of range (occurred records: {occurred})", 404
        )


# --- 3xxx: Staking ---

class PausedError(AppError):
    def __init__(self) -> None:
        super().__init__(3001, "Operations are paused", 423)


class InvalidWindowError(AppError):
    def __init__(self, now: int) -> None:
        super().__init__(3002, f"Invalid time: {now} is outside the staking window", 422)


class InvalidTargetError(AppError):
    def __init__(self, target: int) -> None:
        super().__init__(3003, f"Invalid target timestamp: {target}", 422)


class NotOwnerError(AppError):
    def __init__(self, participant: str, slot: int) -> None:
        super().__init__(3004, f"Slot {slot} does not belong to {participant}", 403)


class WeightTableLockedError(AppError):
    def __init__(self) -> None:
        super().__init__(3005, "Weight table is already set", 409)


class UnknownMinerClassError(AppError):
    def __init__(self, miner_class: object) -> None:
        super().__init__(3006, f"Unknown miner class: {miner_class}", 422)


class InvalidQuantityError(AppError):
    def __init__(self, quantity: int) -> None:
        super().__init__(3007, f"Quantity must be positive, got {quantity}", 422)


class BatchLengthMismatchError(AppError):
    def __init__(self, left: int, right: int) -> None:
        super().__init__(3008, f"Batch length mismatch: {left} != {right}", 422)


class WeightTableNotSetError(AppError):
    def __init__(self) -> None:
        super().__init__(3009, "Weight table has not been set", 409)


# --- 4xxx: Flat mining ---

class UnsupportedAssetError(AppError):
    def __init__(self, asset: object) -> None:
        super().__init__(4001, f"Not supported: {asset}", 422)


class AlreadyMiningError(AppError):
    def __init__(self, participant: str) -> None:
        super().__init__(4002, f"Already mining: {participant}", 409)


class AlreadySupportedError(AppError):
    def __init__(self, asset: object) -> None:
        super().__init__(4003, f"Already supported: {asset}", 409)


class NotMiningError(AppError):
    def __init__(self, participant: str) -> None:
        super().__init__(4004, f"No flat mining position for {participant}", 404)


# --- 5xxx: Treasury / Assets ---

class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            5001,
            f"Insufficient balance: required {required}, available {available}",
            422,
        )


class NotAuthorizedWithdrawerError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(5002, f"Caller is not a claimer: {caller}", 403)


class ClaimerExistsError(AppError):
    def __init__(self, claimer: str) -> None:
        super().__init__(5003, f"Claimer already exists: {claimer}", 409)


class ClaimerNotFoundError(AppError):
    def __init__(self, claimer: str) -> None:
        super().__init__(5004, f"Claimer does not exist: {claimer}", 404)


class InsufficientAssetBalanceError(AppError):
    def __init__(self, asset: object, required: int, available: int) -> None:
        super().__init__(
            5005,
            f"Insufficient {asset}: required {required}, available {available}",
            422,
        )


class AssetNotApprovedError(AppError):
    def __init__(self, holder: str, operator: str) -> None:
        super().__init__(5006, f"{operator} is not approved by {holder}", 403)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class EngineNotReadyError(AppError):
    def __init__(self) -> None:
        super().__init__(9003, "Staking engine has not been started", 503)
