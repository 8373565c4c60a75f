"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Account
  2xxx: Listing
  3xxx: Cart
  4xxx: Checkout/Order
  5xxx: Wallet integration
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


# --- Categories ---

class ValidationError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 400)


class AuthenticationError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 401)


class ForbiddenError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 403)


class NotFoundError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 404)


class ConflictError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 409)


class BusinessRuleError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 422)


class IntegrationError(AppError):
    """External collaborator failed. The provider message is passed through."""

    def __init__(self, code: int, message: str, http_status: int = 502) -> None:
        super().__init__(code, message, http_status)


# --- 1xxx: Auth/Account ---

class EmailExistsError(ConflictError):
    def __init__(self) -> None:
        super().__init__(1001, "Email already in use")


class InvalidCredentialsError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__(1002, "Invalid email or password")


class AccountNotFoundError(NotFoundError):
    def __init__(self, account_id: str) -> None:
        super().__init__(1003, f"User not found: {account_id}")


class IncorrectPasswordError(ValidationError):
    def __init__(self) -> None:
        super().__init__(1004, "Current password is incorrect")


class CurrentPasswordRequiredError(ValidationError):
    def __init__(self) -> None:
        super().__init__(1005, "Current password required to change password")


# --- 2xxx: Listing ---

class ListingNotFoundError(NotFoundError):
    def __init__(self, listing_id: str) -> None:
        super().__init__(2001, f"Product not found: {listing_id}")


class InvalidListingPriceError(ValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(2002, f"Invalid price: {detail}")


class ListingForbiddenError(ForbiddenError):
    def __init__(self, listing_id: str) -> None:
        super().__init__(2003, f"Only the seller can modify product {listing_id}")


# --- 3xxx: Cart ---

class InvalidQuantityError(ValidationError):
    def __init__(self, quantity: int) -> None:
        super().__init__(3001, f"Quantity must be at least 1, got {quantity}")


class EmptyCartError(ValidationError):
    def __init__(self) -> None:
        super().__init__(3002, "Cart is empty")


# --- 4xxx: Checkout/Order ---

class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: str) -> None:
        super().__init__(4001, f"Order not found: {order_id}")


class InvalidPaymentError(ValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(4002, f"Invalid payment details: {detail}")


class InsufficientWalletBalanceError(BusinessRuleError):
    def __init__(self, required_wei: int, available_wei: int) -> None:
        super().__init__(
            4003,
            f"Insufficient wallet balance: required {required_wei} wei, "
            f"available {available_wei} wei",
        )


class WalletNotConnectedError(ValidationError):
    def __init__(self, detail: str = "No wallet account connected") -> None:
        super().__init__(4004, detail)


# --- 5xxx: Wallet integration ---

class WalletUnavailableError(IntegrationError):
    def __init__(self, detail: str = "Wallet provider is not available") -> None:
        super().__init__(5001, detail, 503)


class WalletTransferRejectedError(IntegrationError):
    def __init__(self, detail: str) -> None:
        super().__init__(5002, f"Wallet transfer failed: {detail}")


# --- 9xxx: System ---

class RequestValidationFailed(ValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(9001, detail)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
