from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='JobTracking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('job_id', models.CharField(blank=True, db_index=True, max_length=255, null=True)),
                ('job_class', models.CharField(max_length=255)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('processing', 'Processing'), ('completed', 'Completed'), ('failed', 'Failed')], default='pending', max_length=20)),
                ('related_entity_type', models.CharField(blank=True, max_length=100, null=True)),
                ('related_entity_id', models.PositiveBigIntegerField(blank=True, null=True)),
                ('attempts', models.PositiveIntegerField(default=0)),
                ('error_message', models.TextField(blank=True, null=True)),
                ('error_trace', models.TextField(blank=True, null=True)),
                ('started_at', models.DateTimeField(blank=True, null=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('failed_at', models.DateTimeField(blank=True, null=True)),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Job Tracking',
                'verbose_name_plural': 'Job Tracking',
                'db_table': 'job_tracking',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='job_tracking_status_idx'),
                    models.Index(fields=['job_class'], name='job_tracking_class_idx'),
                    models.Index(fields=['related_entity_type', 'related_entity_id'], name='job_tracking_entity_idx'),
                    models.Index(fields=['created_at'], name='job_tracking_created_idx'),
                ],
            },
        ),
    ]
