import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Complaint',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('complaint_id', models.CharField(blank=True, max_length=32, unique=True)),
                ('patient_id', models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ('patient_name', models.CharField(max_length=255)),
                ('patient_phone', models.CharField(max_length=32)),
                ('is_anonymous', models.BooleanField(default=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(max_length=2000)),
                ('category', models.CharField(choices=[
                    ('appointment_scheduling', 'appointment_scheduling'),
                    ('doctor_behavior', 'doctor_behavior'),
                    ('staff_behavior', 'staff_behavior'),
                    ('facility_cleanliness', 'facility_cleanliness'),
                    ('waiting_time', 'waiting_time'),
                    ('billing_issues', 'billing_issues'),
                    ('medical_care_quality', 'medical_care_quality'),
                    ('prescription_issues', 'prescription_issues'),
                    ('equipment_malfunction', 'equipment_malfunction'),
                    ('accessibility_issues', 'accessibility_issues'),
                    ('privacy_concerns', 'privacy_concerns'),
                    ('communication_issues', 'communication_issues'),
                    ('other', 'other'),
                ], db_index=True, max_length=32)),
                ('subcategory', models.CharField(blank=True, max_length=64)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('urgency', models.CharField(choices=[
                    ('critical', 'critical'), ('high', 'high'), ('medium', 'medium'), ('low', 'low'),
                ], db_index=True, default='medium', max_length=10)),
                ('priority', models.PositiveSmallIntegerField(default=3, help_text='1 (highest) to 5')),
                ('status', models.CharField(choices=[
                    ('open', 'Open'),
                    ('in_progress', 'In progress'),
                    ('pending_patient', 'Pending patient'),
                    ('resolved', 'Resolved'),
                    ('closed', 'Closed'),
                    ('escalated', 'Escalated'),
                ], db_index=True, default='open', max_length=20)),
                ('channel', models.CharField(choices=[
                    ('web', 'Web'),
                    ('telegram', 'Telegram'),
                    ('whatsapp', 'WhatsApp'),
                    ('sms', 'SMS'),
                    ('phone', 'Phone'),
                    ('email', 'Email'),
                    ('in_person', 'In person'),
                ], db_index=True, default='web', max_length=16)),
                ('language', models.CharField(choices=[
                    ('en', 'English'), ('hi', 'Hindi'), ('ml', 'Malayalam'), ('ta', 'Tamil'), ('te', 'Telugu'),
                ], default='en', max_length=4)),
                ('ai_analysis', models.JSONField(blank=True, default=dict)),
                ('assigned_staff_id', models.CharField(blank=True, db_index=True, max_length=64)),
                ('assigned_staff_name', models.CharField(blank=True, max_length=255)),
                ('assigned_department', models.CharField(blank=True, max_length=255)),
                ('assigned_at', models.DateTimeField(blank=True, null=True)),
                ('resolution_summary', models.TextField(blank=True)),
                ('resolution_action', models.TextField(blank=True)),
                ('resolved_by', models.JSONField(blank=True, null=True)),
                ('resolved_at', models.DateTimeField(blank=True, null=True)),
                ('satisfaction_rating', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('satisfaction_feedback', models.TextField(blank=True)),
                ('sla_response_hours', models.PositiveIntegerField(default=24)),
                ('sla_resolution_hours', models.PositiveIntegerField(default=72)),
                ('sla_response_deadline', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('sla_resolution_deadline', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('sla_breached', models.BooleanField(default=False)),
                ('escalation_level', models.PositiveIntegerField(default=0)),
                ('escalated_to', models.CharField(blank=True, max_length=255)),
                ('escalated_at', models.DateTimeField(blank=True, null=True)),
                ('escalation_reason', models.TextField(blank=True)),
                ('auto_escalated', models.BooleanField(default=False)),
                ('related_appointment', models.CharField(blank=True, max_length=64, null=True)),
                ('follow_up_required', models.BooleanField(default=False)),
                ('follow_up_date', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'urgency'], name='complaint_status_urgency_idx'),
                    models.Index(fields=['category', 'status'], name='complaint_category_status_idx'),
                    models.Index(fields=['assigned_staff_id', 'status'], name='complaint_staff_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ComplaintTimelineEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(max_length=32)),
                ('description', models.TextField()),
                ('performed_by', models.JSONField(blank=True, default=dict)),
                ('notes', models.TextField(blank=True)),
                ('timestamp', models.DateTimeField(default=django.utils.timezone.now)),
                ('complaint', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='timeline',
                    to='complaints.complaint',
                )),
            ],
            options={
                'ordering': ['timestamp', 'id'],
                'indexes': [
                    models.Index(fields=['complaint', 'timestamp'], name='timeline_complaint_ts_idx'),
                ],
            },
        ),
    ]
