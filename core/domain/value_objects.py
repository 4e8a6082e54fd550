"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import uuid
from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

CENTS = Decimal("0.01")


def quantize_amount(value: Union[Decimal, int, str]) -> Decimal:
    """
    Normalize a monetary amount to two fractional digits.

    Args:
        value: Amount as Decimal, int or numeric string

    Returns:
        Decimal rounded half-up to cents

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted((k, str(v)) for k, v in self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


class Role(Enum):
    """Back-office operator role."""

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    RESELLER = "reseller"
    AGENT = "agent"
    CLIENT = "client"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Actor(ValueObject):
    """
    Identity of whoever performs a mutating operation.

    Passed explicitly into every command so that ledger rows, access logs
    and status changes can be attributed without ambient state.
    """

    operator_id: Optional[uuid.UUID]
    role: Role
    company_id: Optional[uuid.UUID] = None
    name: str = ""

    @classmethod
    def system(cls) -> "Actor":
        """Actor used by scheduled jobs and management commands."""
        return cls(operator_id=None, role=Role.SUPERADMIN, company_id=None, name="system")

    @property
    def is_superadmin(self) -> bool:
        return self.role == Role.SUPERADMIN

    def __str__(self) -> str:
        return self.name or str(self.operator_id or "system")


class CompanyType(Enum):
    """Position of a company in the distribution hierarchy."""

    RESELLER = "reseller"
    SUB_COMPANY = "sub_company"
    AGENT = "agent"
    END_CLIENT = "end_client"

    def __str__(self) -> str:
        return self.value


class CompanyStatus(Enum):
    """Company status value object."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"

    def __str__(self) -> str:
        return self.value


class ClientStatus(Enum):
    """Client validation status."""

    VALIDATED = "validated"
    PENDING = "pending"
    SUSPENDED = "suspended"

    def __str__(self) -> str:
        return self.value


class LicenseType(Enum):
    """License term template."""

    PERMANENT = "permanent"
    TRIAL = "trial"
    MONTHLY = "monthly"
    ANNUAL = "annual"

    def __str__(self) -> str:
        return self.value

    @property
    def is_subscription(self) -> bool:
        return self in (LicenseType.MONTHLY, LicenseType.ANNUAL)


class LicenseStatus(Enum):
    """License status value object."""

    PENDING = "pending"
    ACTIVE = "active"
    DEMO = "demo"
    EXPIRED = "expired"
    SUSPENDED = "suspended"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value

    @property
    def is_terminal(self) -> bool:
        """Statuses that time-based expiry never overrides."""
        return self in (LicenseStatus.EXPIRED, LicenseStatus.SUSPENDED)

    @property
    def is_usable(self) -> bool:
        return self in (LicenseStatus.ACTIVE, LicenseStatus.DEMO)


class ActivationKeyType(Enum):
    """Which key an activation log entry was checked against."""

    ACTIVATION = "activation"
    COMPUTER = "computer"

    def __str__(self) -> str:
        return self.value


class TransactionType(Enum):
    """Billing transaction type."""

    ACTIVATION = "activation"
    RENEWAL = "renewal"
    DEFERRED = "deferred"

    def __str__(self) -> str:
        return self.value


class TransactionStatus(Enum):
    """Billing transaction payment status."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    PAID_WITH_CREDITS = "paid_with_credits"

    def __str__(self) -> str:
        return self.value

    @property
    def is_paid(self) -> bool:
        return self in (TransactionStatus.COMPLETED, TransactionStatus.PAID_WITH_CREDITS)


class WalletTransactionType(Enum):
    """Wallet ledger row type."""

    RECHARGE = "recharge"
    SPEND = "spend"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"

    def __str__(self) -> str:
        return self.value

    @property
    def is_credit(self) -> bool:
        return self in (WalletTransactionType.RECHARGE, WalletTransactionType.TRANSFER_IN)
