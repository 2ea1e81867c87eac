from django.db import models
from django.utils import timezone
import uuid


class SiteActivity(models.Model):
    """One page view, grouped into sessions by time bucket."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Null for visitors who are not signed in
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='site_activity'
    )

    path = models.CharField(max_length=500)

    # created_at floored to SESSION_BUCKET_MINUTES
    session_bucket = models.DateTimeField(db_index=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'site_activity'
        ordering = ['-created_at']
        verbose_name_plural = 'site activity'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='site_activity_user_idx'),
        ]

    def __str__(self):
        who = self.user.email if self.user else 'anonymous'
        return f"{self.path} by {who} at {self.created_at:%Y-%m-%d %H:%M}"
