"""
Wallet ledger domain service.

Pure functions computing the new wallet state and the ledger rows for
recharge, spend and transfer. Persistence applies the result as one
atomic unit.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from core.domain.exceptions import InsufficientFundsError, InvalidAmountError, ValidationError
from core.domain.value_objects import Actor, WalletTransactionType, quantize_amount
from wallets.domain.wallet import CompanyWallet, WalletTransaction


@dataclass(frozen=True)
class LedgerMutation:
    """New wallet states plus the ledger rows that explain them."""

    wallets: Dict[uuid.UUID, CompanyWallet]
    entries: List[WalletTransaction] = field(default_factory=list)


class WalletLedger:
    """Ledger rules for company wallets."""

    @staticmethod
    def validate_amount(amount) -> Decimal:
        """
        Normalize an amount and require it to be positive.

        Raises:
            InvalidAmountError: If the amount is not a number or not > 0
        """
        try:
            value = quantize_amount(amount)
        except ValueError as e:
            raise InvalidAmountError(str(e)) from e
        if value <= 0:
            raise InvalidAmountError(f"Amount must be greater than zero, got {value}")
        return value

    @classmethod
    def recharge(
        cls,
        wallet: CompanyWallet,
        amount,
        actor: Actor,
        now: datetime,
        description: str = "",
    ) -> LedgerMutation:
        """
        Add credits to a wallet.

        Args:
            wallet: Current wallet state
            amount: Positive amount
            actor: Acting operator
            now: Canonical timestamp
            description: Ledger row description

        Returns:
            LedgerMutation with one recharge row

        Raises:
            InvalidAmountError: If amount <= 0
        """
        value = cls.validate_amount(amount)
        updated = wallet.credited(value, now, recharge=True)
        entry = WalletTransaction(
            id=uuid.uuid4(),
            company_id=wallet.company_id,
            transaction_type=WalletTransactionType.RECHARGE,
            amount=value,
            balance_before=wallet.balance,
            balance_after=updated.balance,
            created_at=now,
            description=description or "Wallet recharge",
            created_by=actor.operator_id,
        )
        return LedgerMutation(wallets={wallet.company_id: updated}, entries=[entry])

    @classmethod
    def spend(
        cls,
        wallet: CompanyWallet,
        amount,
        actor: Actor,
        now: datetime,
        description: str = "",
        related_entity_type: str = "",
        related_entity_id: str = "",
    ) -> LedgerMutation:
        """
        Debit credits from a wallet.

        Raises:
            InvalidAmountError: If amount <= 0
            InsufficientFundsError: If amount exceeds the balance
        """
        value = cls.validate_amount(amount)
        if value > wallet.balance:
            raise InsufficientFundsError(
                f"Wallet balance {wallet.balance} cannot cover {value}"
            )
        updated = wallet.debited(value, now, spend=True)
        entry = WalletTransaction(
            id=uuid.uuid4(),
            company_id=wallet.company_id,
            transaction_type=WalletTransactionType.SPEND,
            amount=value,
            balance_before=wallet.balance,
            balance_after=updated.balance,
            created_at=now,
            description=description or "Wallet spend",
            related_entity_type=related_entity_type,
            related_entity_id=related_entity_id,
            created_by=actor.operator_id,
        )
        return LedgerMutation(wallets={wallet.company_id: updated}, entries=[entry])

    @classmethod
    def transfer(
        cls,
        source: CompanyWallet,
        target: CompanyWallet,
        amount,
        actor: Actor,
        now: datetime,
        description: str = "",
        correlation_id: Optional[uuid.UUID] = None,
    ) -> LedgerMutation:
        """
        Move credits between two wallets.

        Produces a transfer_out row on the source and a transfer_in row
        on the target sharing one correlation id.

        Raises:
            InvalidAmountError: If amount <= 0
            ValidationError: If source and target are the same company
            InsufficientFundsError: If the source cannot cover the amount
        """
        value = cls.validate_amount(amount)
        if source.company_id == target.company_id:
            raise ValidationError("Cannot transfer credits to the same company")
        if value > source.balance:
            raise InsufficientFundsError(
                f"Wallet balance {source.balance} cannot cover {value}"
            )
        correlation_id = correlation_id or uuid.uuid4()
        debited = source.debited(value, now)
        credited = target.credited(value, now)
        description = description or "Credit transfer"
        entries = [
            WalletTransaction(
                id=uuid.uuid4(),
                company_id=source.company_id,
                transaction_type=WalletTransactionType.TRANSFER_OUT,
                amount=value,
                balance_before=source.balance,
                balance_after=debited.balance,
                created_at=now,
                description=description,
                counterparty_company_id=target.company_id,
                correlation_id=correlation_id,
                created_by=actor.operator_id,
            ),
            WalletTransaction(
                id=uuid.uuid4(),
                company_id=target.company_id,
                transaction_type=WalletTransactionType.TRANSFER_IN,
                amount=value,
                balance_before=target.balance,
                balance_after=credited.balance,
                created_at=now,
                description=description,
                counterparty_company_id=source.company_id,
                correlation_id=correlation_id,
                created_by=actor.operator_id,
            ),
        ]
        return LedgerMutation(
            wallets={source.company_id: debited, target.company_id: credited},
            entries=entries,
        )

    @staticmethod
    def running_balance(entries: List[WalletTransaction]) -> Decimal:
        """Sum of the signed amounts of ledger rows."""
        return sum((entry.signed_amount for entry in entries), Decimal("0.00"))
