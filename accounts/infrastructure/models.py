"""
Operator, ApiKey and AccessLog models.
"""
import hashlib
import secrets
import uuid

from django.db import models
from django.utils import timezone


class Operator(models.Model):
    """
    A back-office user. The role and company decide which part of the
    company tree the operator can see and change.
    """

    ROLE_CHOICES = [
        ("superadmin", "Super admin"),
        ("admin", "Admin"),
        ("reseller", "Reseller"),
        ("agent", "Agent"),
        ("client", "Client"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=150, unique=True)
    full_name = models.CharField(max_length=255, blank=True)
    email = models.EmailField(blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="client")
    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="operators",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "operators"
        ordering = ["username"]

    def __str__(self):
        return f"{self.username} ({self.role})"

    def generate_api_key(self) -> str:
        """
        Create a new API key for this operator.

        Returns:
            The raw key; only its hash is stored
        """
        api_key = ApiKey(operator=self)
        api_key.save()
        return api_key._raw_key


class ApiKey(models.Model):
    """
    API keys for operator authentication.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    operator = models.ForeignKey(Operator, on_delete=models.CASCADE, related_name="api_keys")
    key_prefix = models.CharField(max_length=8, editable=False)
    key_hash = models.CharField(max_length=64, editable=False, db_index=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "api_keys"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["key_hash"]),
        ]

    def __str__(self):
        return f"{self.operator.username} - {self.key_prefix}..."

    @staticmethod
    def hash_key(raw_key: str) -> str:
        return hashlib.sha256(raw_key.encode()).hexdigest()

    def save(self, *args, **kwargs):
        """Generate API key on first save."""
        if not self.key_hash:
            raw_key = secrets.token_urlsafe(32)
            self.key_prefix = raw_key[:8]
            self.key_hash = self.hash_key(raw_key)
            # Only available on the instance that created the key
            self._raw_key = raw_key
        super().save(*args, **kwargs)

    def verify_key(self, raw_key: str) -> bool:
        return secrets.compare_digest(self.key_hash, self.hash_key(raw_key))

    def is_valid(self) -> bool:
        """
        Check if the API key is still valid.

        Returns:
            True if key is valid, False if expired or the operator is disabled
        """
        if not self.operator.is_active:
            return False
        if self.expires_at and self.expires_at < timezone.now():
            return False
        return True

    def mark_used(self):
        """Update last_used_at timestamp."""
        self.last_used_at = timezone.now()
        self.save(update_fields=["last_used_at"])


class AccessLog(models.Model):
    """
    Append-only record of authenticated back-office requests.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    operator = models.ForeignKey(
        Operator,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="access_logs",
    )
    action = models.CharField(max_length=20)
    resource = models.CharField(max_length=500)
    status_code = models.PositiveSmallIntegerField(null=True, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "access_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["operator", "created_at"]),
        ]

    def __str__(self):
        return f"{self.action} {self.resource}"
