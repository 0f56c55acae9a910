"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  2xxx: Wallet
  3xxx: Pricing
  4xxx: Trip
  9xxx: System

Expected business outcomes (insufficient balance on a pre-check, blocked
cancellation) are returned as typed results by the domain layer. The
application layer converts them into these errors only at the HTTP boundary.
"""

from decimal import Decimal


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        data: dict[str, object] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.data = data
        super().__init__(message)


# --- 1xxx: Auth ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired token", 401)


# --- 2xxx: Wallet ---

class InsufficientBalanceError(AppError):
    def __init__(self, required: Decimal, available: Decimal) -> None:
        deficit = max(Decimal(0), required - available)
        super().__init__(
            2001,
            f"Insufficient balance: required {required}, available {available}",
            422,
            data={"required": str(required), "available": str(available), "deficit": str(deficit)},
        )
        self.deficit = deficit


class WalletNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(2002, f"Wallet not found for user {user_id}", 404)


class TransactionWriteFailureError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2003, f"Wallet transaction failed: {detail}", 500)


# --- 3xxx: Pricing ---

class ConfigUnavailableError(AppError):
    def __init__(self) -> None:
        super().__init__(3001, "Pricing assumptions are not available", 503)


class PriceOutOfRangeError(AppError):
    def __init__(self, price: Decimal, min_price: Decimal, max_price: Decimal) -> None:
        super().__init__(
            3002,
            f"Price {price} out of allowed range [{min_price}, {max_price}]",
            422,
        )


# --- 4xxx: Trip ---

class TripNotFoundError(AppError):
    def __init__(self, trip_id: int) -> None:
        super().__init__(4001, f"Trip not found: {trip_id}", 404)


class InvalidStateTransitionError(AppError):
    def __init__(self, trip_id: int, status: str, action: str) -> None:
        super().__init__(4002, f"Trip {trip_id} in status {status} cannot {action}", 422)


class CancellationBlockedError(AppError):
    def __init__(self, trip_id: int, seats_reserved: int) -> None:
        super().__init__(
            4003,
            f"Trip {trip_id} has {seats_reserved} reserved seat(s) and cannot be canceled; "
            "contact support",
            409,
        )


class InvalidSeatCountError(AppError):
    def __init__(self, seats: int, min_seats: int, max_seats: int) -> None:
        super().__init__(4004, f"Seats must be between {min_seats} and {max_seats}, got {seats}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
