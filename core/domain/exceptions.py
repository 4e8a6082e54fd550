"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class NotFoundError(DomainException):
    """Base exception for lookups of unknown entities."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class ValidationError(DomainException):
    """Raised when input violates an entity schema or a business rule."""

    def __init__(self, message: str = "Validation failed", code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class PermissionDeniedError(DomainException):
    """Raised when the acting operator may not touch a resource."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, code="PERMISSION_DENIED")


class InvalidAPIKeyError(DomainException):
    """Raised when an operator API key is invalid."""

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message, code="INVALID_API_KEY")


class CompanyNotFoundError(NotFoundError):
    """Raised when a company is not found."""

    def __init__(self, message: str = "Company not found"):
        super().__init__(message, code="COMPANY_NOT_FOUND")


class ClientNotFoundError(NotFoundError):
    """Raised when a client is not found."""

    def __init__(self, message: str = "Client not found"):
        super().__init__(message, code="CLIENT_NOT_FOUND")


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message, code="PRODUCT_NOT_FOUND")


class InvalidCompanyHierarchyError(ValidationError):
    """Raised when a company's parent is not allowed for its type."""

    def __init__(self, message: str = "Invalid company hierarchy"):
        super().__init__(message, code="INVALID_COMPANY_HIERARCHY")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseExpiredError(LicenseException):
    """Raised when a license has expired."""

    def __init__(self, message: str = "License has expired"):
        super().__init__(message, code="LICENSE_EXPIRED")


class LicenseSuspendedError(LicenseException):
    """Raised when a license is suspended."""

    def __init__(self, message: str = "License is suspended"):
        super().__init__(message, code="LICENSE_SUSPENDED")


class DeviceAlreadyBoundError(LicenseException):
    """Raised when a license is already bound to a different device."""

    def __init__(self, message: str = "License is already bound to another device"):
        super().__init__(message, code="DEVICE_ALREADY_BOUND")


class InvalidLicenseStatusError(LicenseException):
    """Raised when a license operation is invalid for the current status."""

    def __init__(self, message: str = "Invalid license status"):
        super().__init__(message, code="INVALID_LICENSE_STATUS")


class WalletException(DomainException):
    """Base exception for wallet ledger errors."""

    pass


class InvalidAmountError(WalletException):
    """Raised when a monetary amount is zero or negative."""

    def __init__(self, message: str = "Amount must be greater than zero"):
        super().__init__(message, code="INVALID_AMOUNT")


class InsufficientFundsError(WalletException):
    """Raised when a wallet balance cannot cover a debit."""

    def __init__(self, message: str = "Insufficient wallet balance"):
        super().__init__(message, code="INSUFFICIENT_FUNDS")


class ConcurrentUpdateError(WalletException):
    """Raised when a wallet changed between read and conditional write."""

    def __init__(self, message: str = "Wallet was modified concurrently"):
        super().__init__(message, code="CONCURRENT_UPDATE")


class TransactionNotFoundError(NotFoundError):
    """Raised when a billing transaction is not found."""

    def __init__(self, message: str = "Transaction not found"):
        super().__init__(message, code="TRANSACTION_NOT_FOUND")


class RegistrationNotFoundError(NotFoundError):
    """Raised when a device registration is not found."""

    def __init__(self, message: str = "Device registration not found"):
        super().__init__(message, code="REGISTRATION_NOT_FOUND")
