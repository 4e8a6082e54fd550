"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import secrets
import string
from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from core.domain.value_objects import LicenseStatus, LicenseType
from licenses.domain.license import License


class LicenseStatusPolicy:
    """
    Derives the effective status of a license.

    This is the single source of truth for status on every read and
    for the periodic sweep. It never mutates anything.
    """

    @staticmethod
    def compute_status(license: License, now: datetime) -> LicenseStatus:
        """
        Effective status of a license at ``now``.

        Args:
            license: License entity
            now: Canonical timestamp of the calling operation

        Returns:
            EXPIRED when the expiry date lies strictly before ``now`` and
            the stored status is not terminal, otherwise the stored status
        """
        if license.status.is_terminal:
            return license.status
        if license.expiry_date is not None and license.expiry_date < now:
            return LicenseStatus.EXPIRED
        return license.status

    @classmethod
    def is_expiring(cls, license: License, now: datetime, horizon_days: int) -> bool:
        """
        Whether a license runs out within the horizon.

        Args:
            license: License entity
            now: Canonical timestamp
            horizon_days: Look-ahead window in days

        Returns:
            True for usable licenses with now < expiry <= now + horizon
        """
        if license.expiry_date is None:
            return False
        if not (now < license.expiry_date <= now + timedelta(days=horizon_days)):
            return False
        return cls.compute_status(license, now).is_usable


class ExpiryCalculator:
    """Computes expiry dates from a license type."""

    @staticmethod
    def calculate(
        license_type: LicenseType, start: datetime, trial_days: int = 30
    ) -> Optional[datetime]:
        """
        Expiry date of a license term starting at ``start``.

        Args:
            license_type: Term template
            start: First day of the term
            trial_days: Length of a trial

        Returns:
            None for permanent licenses, otherwise the last moment of
            the term (subscriptions end the day before the anniversary)
        """
        if license_type == LicenseType.PERMANENT:
            return None
        if license_type == LicenseType.TRIAL:
            return start + timedelta(days=trial_days)
        if license_type == LicenseType.MONTHLY:
            return start + relativedelta(months=1) - timedelta(days=1)
        return start + relativedelta(years=1) - timedelta(days=1)

    @classmethod
    def next_term(cls, license: License, now: datetime) -> Optional[datetime]:
        """
        Expiry after one renewal.

        The new term continues from the current expiry, or from ``now``
        when the license already lapsed or never had one.
        """
        start = license.expiry_date if license.expiry_date and license.expiry_date > now else now
        return cls.calculate(license.license_type, start, license.trial_days)


class ActivationKeyGenerator:
    """Domain service for activation key generation."""

    ALPHABET = string.ascii_uppercase + string.digits

    @classmethod
    def generate(cls, license_type: LicenseType) -> str:
        """
        Generate an activation key in format: TYPE-XXXX-XXXX-XXXX.

        Args:
            license_type: License type used as key prefix

        Returns:
            Generated activation key string
        """
        parts = ["".join(secrets.choice(cls.ALPHABET) for _ in range(4)) for _ in range(3)]
        return f"{license_type.value.upper()}-{'-'.join(parts)}"
