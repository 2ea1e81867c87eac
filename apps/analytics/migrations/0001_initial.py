import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SiteActivity',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('path', models.CharField(max_length=500)),
                ('session_bucket', models.DateTimeField(db_index=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='site_activity', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'site_activity',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'site activity',
                'indexes': [models.Index(fields=['user', 'created_at'], name='site_activity_user_idx')],
            },
        ),
    ]
