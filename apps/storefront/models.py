from django.db import models
from decimal import Decimal
import uuid


class MenuItem(models.Model):
    """A product on a business's public price list."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='menu_items'
    )

    name = models.CharField(max_length=200, blank=True)
    price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    description = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'menu_items'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='menu_items_user_created_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.price})"
