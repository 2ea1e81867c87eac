from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


DEFAULT_CUSTOMER_NAME = 'Guest Customer'


class PaymentMethod(models.TextChoices):
    TRANSFER = 'Transfer', 'Transfer'
    CASH = 'Cash', 'Cash'
    POS = 'POS', 'POS'


class ReceiptStatus(models.TextChoices):
    PAID = 'Paid', 'Paid'
    PENDING = 'Pending', 'Pending'


class Receipt(models.Model):
    """A saved receipt issued by a business to one customer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='receipts'
    )

    # Sequential per business ("001", "002", ...)
    receipt_number = models.CharField(max_length=20)
    customer_name = models.CharField(max_length=150, default=DEFAULT_CUSTOMER_NAME)

    # Line items as entered: [{"id", "name", "qty", "price"}, ...]
    items = models.JSONField(default=list, blank=True)

    # Financial details
    currency = models.CharField(max_length=20, default='₦')
    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    discount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    shipping = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.TRANSFER
    )
    status = models.CharField(
        max_length=20,
        choices=ReceiptStatus.choices,
        default=ReceiptStatus.PAID
    )
    note = models.TextField(blank=True)

    # Date printed on the receipt (dd/mm/yyyy, editable by the user)
    receipt_date = models.CharField(max_length=20, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'receipts'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'receipt_number'],
                name='unique_receipt_number_per_user'
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'created_at'], name='receipts_user_created_idx'),
        ]

    def __str__(self):
        return f"#{self.receipt_number} - {self.customer_name} ({self.amount})"

    @property
    def amount(self):
        """Total formatted for display, e.g. '₦2,100'."""
        from .services.calculations import format_amount
        return format_amount(self.currency, self.total_amount)
