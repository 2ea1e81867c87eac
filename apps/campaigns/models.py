from django.db import models
import uuid


class Campaign(models.Model):
    """Audit record of an email campaign sent from the back-office."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    subject = models.CharField(max_length=200)
    message_body = models.TextField()
    flyer_url = models.URLField(max_length=500, blank=True)
    recipient_count = models.PositiveIntegerField(default=0)

    sent_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='campaigns_sent'
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'campaigns'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.subject} ({self.recipient_count} recipients)"
