"""
Database models for complaint intake.

A :class:`Complaint` carries the patient's free text, the triage outcome
(category, urgency and the stored analysis), its assignment, SLA
deadlines, escalation and resolution details.  Every lifecycle change is
recorded as a :class:`ComplaintTimelineEntry`.
"""
from __future__ import annotations

import random
from datetime import timedelta
from typing import Optional

from django.db import models, transaction
from django.utils import timezone

from .lexicons import CATEGORIES, URGENCIES

SYSTEM_ACTOR = {'id': 'system', 'name': 'System', 'role': 'system'}

# urgency: (response hours, resolution hours)
SLA_HOURS = {
    'critical': (1, 4),
    'high': (4, 24),
}
DEFAULT_SLA_HOURS = (24, 72)
DEFAULT_PRIORITY = 3


def sla_hours_for(urgency: str) -> tuple[int, int]:
    return SLA_HOURS.get(urgency, DEFAULT_SLA_HOURS)


def generate_complaint_id(now=None) -> str:
    """Return an ID such as ``CMP202610181234``."""
    now = timezone.localtime(now or timezone.now())
    return f"CMP{now:%Y%m%d}{random.randint(1000, 9999)}"


class Complaint(models.Model):
    STATUS_OPEN = 'open'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_PENDING_PATIENT = 'pending_patient'
    STATUS_RESOLVED = 'resolved'
    STATUS_CLOSED = 'closed'
    STATUS_ESCALATED = 'escalated'
    STATUS_CHOICES = [
        (STATUS_OPEN, 'Open'),
        (STATUS_IN_PROGRESS, 'In progress'),
        (STATUS_PENDING_PATIENT, 'Pending patient'),
        (STATUS_RESOLVED, 'Resolved'),
        (STATUS_CLOSED, 'Closed'),
        (STATUS_ESCALATED, 'Escalated'),
    ]
    ACTIVE_STATUSES = (STATUS_OPEN, STATUS_IN_PROGRESS, STATUS_ESCALATED)

    TRANSITIONS = {
        STATUS_OPEN: (STATUS_IN_PROGRESS, STATUS_PENDING_PATIENT, STATUS_ESCALATED, STATUS_RESOLVED, STATUS_CLOSED),
        STATUS_IN_PROGRESS: (STATUS_PENDING_PATIENT, STATUS_ESCALATED, STATUS_RESOLVED, STATUS_CLOSED),
        STATUS_PENDING_PATIENT: (STATUS_IN_PROGRESS, STATUS_ESCALATED, STATUS_RESOLVED, STATUS_CLOSED),
        STATUS_ESCALATED: (STATUS_IN_PROGRESS, STATUS_RESOLVED, STATUS_CLOSED),
        STATUS_RESOLVED: (STATUS_IN_PROGRESS, STATUS_CLOSED),
        STATUS_CLOSED: (),
    }

    CATEGORY_CHOICES = [(c, c) for c in CATEGORIES]
    URGENCY_CHOICES = [(u, u) for u in URGENCIES]
    CHANNEL_CHOICES = [
        ('web', 'Web'),
        ('telegram', 'Telegram'),
        ('whatsapp', 'WhatsApp'),
        ('sms', 'SMS'),
        ('phone', 'Phone'),
        ('email', 'Email'),
        ('in_person', 'In person'),
    ]
    LANGUAGE_CHOICES = [
        ('en', 'English'),
        ('hi', 'Hindi'),
        ('ml', 'Malayalam'),
        ('ta', 'Tamil'),
        ('te', 'Telugu'),
    ]

    complaint_id = models.CharField(max_length=32, unique=True, blank=True)
    # External patient reference; patients live outside this service.
    patient_id = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    patient_name = models.CharField(max_length=255)
    patient_phone = models.CharField(max_length=32)
    is_anonymous = models.BooleanField(default=False)

    title = models.CharField(max_length=200)
    description = models.TextField(max_length=2000)
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES, db_index=True)
    subcategory = models.CharField(max_length=64, blank=True)
    tags = models.JSONField(default=list, blank=True)

    urgency = models.CharField(max_length=10, choices=URGENCY_CHOICES, default='medium', db_index=True)
    priority = models.PositiveSmallIntegerField(default=DEFAULT_PRIORITY, help_text="1 (highest) to 5")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_OPEN, db_index=True)
    channel = models.CharField(max_length=16, choices=CHANNEL_CHOICES, default='web', db_index=True)
    language = models.CharField(max_length=4, choices=LANGUAGE_CHOICES, default='en')
    ai_analysis = models.JSONField(default=dict, blank=True)

    assigned_staff_id = models.CharField(max_length=64, blank=True, db_index=True)
    assigned_staff_name = models.CharField(max_length=255, blank=True)
    assigned_department = models.CharField(max_length=255, blank=True)
    assigned_at = models.DateTimeField(null=True, blank=True)

    resolution_summary = models.TextField(blank=True)
    resolution_action = models.TextField(blank=True)
    resolved_by = models.JSONField(null=True, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    satisfaction_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    satisfaction_feedback = models.TextField(blank=True)

    sla_response_hours = models.PositiveIntegerField(default=DEFAULT_SLA_HOURS[0])
    sla_resolution_hours = models.PositiveIntegerField(default=DEFAULT_SLA_HOURS[1])
    sla_response_deadline = models.DateTimeField(null=True, blank=True, db_index=True)
    sla_resolution_deadline = models.DateTimeField(null=True, blank=True, db_index=True)
    sla_breached = models.BooleanField(default=False)

    escalation_level = models.PositiveIntegerField(default=0)
    escalated_to = models.CharField(max_length=255, blank=True)
    escalated_at = models.DateTimeField(null=True, blank=True)
    escalation_reason = models.TextField(blank=True)
    auto_escalated = models.BooleanField(default=False)

    related_appointment = models.CharField(max_length=64, blank=True, null=True)
    follow_up_required = models.BooleanField(default=False)
    follow_up_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'urgency'], name='complaint_status_urgency_idx'),
            models.Index(fields=['category', 'status'], name='complaint_category_status_idx'),
            models.Index(fields=['assigned_staff_id', 'status'], name='complaint_staff_status_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.complaint_id}: {self.title}"

    def save(self, *args, **kwargs):
        if not self.complaint_id:
            complaint_id = generate_complaint_id(self.created_at)
            while Complaint.objects.filter(complaint_id=complaint_id).exists():
                complaint_id = generate_complaint_id(self.created_at)
            self.complaint_id = complaint_id
        if self.sla_response_deadline is None or self.sla_resolution_deadline is None:
            self.apply_sla()
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # SLA
    # ------------------------------------------------------------------
    def apply_sla(self) -> None:
        """Derive SLA hours and deadlines from urgency and creation time."""
        response_hours, resolution_hours = sla_hours_for(self.urgency)
        start = self.created_at or timezone.now()
        self.sla_response_hours = response_hours
        self.sla_resolution_hours = resolution_hours
        self.sla_response_deadline = start + timedelta(hours=response_hours)
        self.sla_resolution_deadline = start + timedelta(hours=resolution_hours)

    @property
    def age_in_hours(self) -> int:
        return int((timezone.now() - self.created_at).total_seconds() // 3600)

    @property
    def sla_status(self) -> str:
        now = timezone.now()
        if self.sla_resolution_deadline and now > self.sla_resolution_deadline:
            return 'overdue'
        if self.sla_response_deadline and now > self.sla_response_deadline and self.status == self.STATUS_OPEN:
            return 'response_overdue'
        return 'on_time'

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def can_transition(self, new_status: str) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, ())

    def add_timeline_entry(self, action: str, description: str, performed_by: Optional[dict] = None,
                           notes: str = '') -> 'ComplaintTimelineEntry':
        # drop any prefetched timeline so callers see the new entry
        getattr(self, '_prefetched_objects_cache', {}).pop('timeline', None)
        return ComplaintTimelineEntry.objects.create(
            complaint=self,
            action=action,
            description=description,
            performed_by=performed_by or {},
            notes=notes or '',
        )

    @transaction.atomic
    def assign_to(self, staff_id: str, staff_name: str, department: str) -> None:
        self.assigned_staff_id = staff_id
        self.assigned_staff_name = staff_name
        self.assigned_department = department
        self.assigned_at = timezone.now()
        self.status = self.STATUS_IN_PROGRESS
        self.save()
        self.add_timeline_entry(
            'assigned',
            f"Complaint assigned to {staff_name} ({department})",
            SYSTEM_ACTOR,
        )

    @transaction.atomic
    def update_status(self, new_status: str, performed_by: Optional[dict] = None, notes: str = '') -> None:
        if new_status not in dict(self.STATUS_CHOICES):
            raise ValueError(f"unknown status: {new_status}")
        if not self.can_transition(new_status):
            raise ValueError(f"cannot change status from {self.status} to {new_status}")
        old_status = self.status
        self.status = new_status
        self.save()
        self.add_timeline_entry(
            'status_change',
            f"Status changed from {old_status} to {new_status}",
            performed_by,
            notes,
        )

    @transaction.atomic
    def escalate(self, reason: str, escalated_to: str, performed_by: Optional[dict] = None,
                 auto: bool = False) -> None:
        if self.status == self.STATUS_CLOSED:
            raise ValueError("cannot escalate a closed complaint")
        self.escalation_level += 1
        self.escalated_to = escalated_to
        self.escalated_at = timezone.now()
        self.escalation_reason = reason
        self.auto_escalated = self.auto_escalated or auto
        self.status = self.STATUS_ESCALATED
        self.save()
        self.add_timeline_entry(
            'escalated',
            f"Complaint escalated to {escalated_to}. Reason: {reason}",
            performed_by or (SYSTEM_ACTOR if auto else None),
        )

    @transaction.atomic
    def resolve(self, summary: str, action_taken: str = '', resolved_by: Optional[dict] = None,
                follow_up_date=None) -> None:
        """Resolve the complaint; a ``follow_up_date`` also marks it for follow-up."""
        if self.status == self.STATUS_CLOSED:
            raise ValueError("cannot resolve a closed complaint")
        self.status = self.STATUS_RESOLVED
        self.resolution_summary = summary
        self.resolution_action = action_taken or ''
        self.resolved_by = resolved_by
        self.resolved_at = timezone.now()
        self.follow_up_required = follow_up_date is not None
        self.follow_up_date = follow_up_date
        self.save()
        self.add_timeline_entry('resolved', f"Complaint resolved: {summary}", resolved_by)

    @transaction.atomic
    def record_feedback(self, rating: int, feedback: str = '', performed_by: Optional[dict] = None) -> None:
        if self.status not in (self.STATUS_RESOLVED, self.STATUS_CLOSED):
            raise ValueError("feedback can only be given on a resolved or closed complaint")
        if not 1 <= rating <= 5:
            raise ValueError(f"rating must be between 1 and 5, got {rating}")
        self.satisfaction_rating = rating
        self.satisfaction_feedback = feedback or ''
        self.save()
        self.add_timeline_entry('feedback', f"Patient rated the resolution {rating}/5", performed_by, feedback)


class ComplaintTimelineEntry(models.Model):
    """One lifecycle event on a complaint."""
    complaint = models.ForeignKey(Complaint, related_name='timeline', on_delete=models.CASCADE)
    action = models.CharField(max_length=32)
    description = models.TextField()
    # {"id": ..., "name": ..., "role": ...}
    performed_by = models.JSONField(default=dict, blank=True)
    notes = models.TextField(blank=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['timestamp', 'id']
        indexes = [models.Index(fields=['complaint', 'timestamp'], name='timeline_complaint_ts_idx')]

    def __str__(self) -> str:
        return f"{self.complaint_id}: {self.action}"
