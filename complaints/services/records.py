from typing import Optional, List
from django.utils import timezone
from django.db.models import Q, Case, When, IntegerField, Value

from complaints.lexicons import URGENCY_RANK
from complaints.models import Complaint


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def get_complaint(complaint_id: str) -> Optional[Complaint]:
    return Complaint.objects.prefetch_related('timeline').filter(complaint_id=complaint_id).first()


def complaints_for_patient(patient_id: str) -> List[Complaint]:
    return list(Complaint.objects.filter(patient_id=patient_id).prefetch_related('timeline').order_by('-created_at'))


def open_complaints() -> List[Complaint]:
    # most urgent first, then oldest first
    urgency_rank = Case(
        *[When(urgency=label, then=Value(rank)) for label, rank in URGENCY_RANK.items()],
        default=Value(URGENCY_RANK['medium']),
        output_field=IntegerField(),
    )
    return list(
        Complaint.objects.filter(status__in=Complaint.ACTIVE_STATUSES)
        .annotate(urgency_rank=urgency_rank)
        .prefetch_related('timeline')
        .order_by('-urgency_rank', 'created_at')
    )


def overdue_complaints(now=None) -> List[Complaint]:
    now = now or timezone.now()
    return list(
        Complaint.objects.filter(
            Q(sla_response_deadline__lt=now, status=Complaint.STATUS_OPEN)
            | Q(sla_resolution_deadline__lt=now, status__in=[Complaint.STATUS_OPEN, Complaint.STATUS_IN_PROGRESS])
        )
        .prefetch_related('timeline')
        .order_by('sla_resolution_deadline')
    )


def format_assignment(c: Complaint) -> Optional[dict]:
    if not c.assigned_staff_id:
        return None
    return {
        'staffId': c.assigned_staff_id,
        'staffName': c.assigned_staff_name,
        'department': c.assigned_department,
        'assignedAt': _iso(c.assigned_at),
    }


def format_timeline(c: Complaint) -> list[dict]:
    return [
        {
            'action': t.action,
            'description': t.description,
            'performedBy': t.performed_by or None,
            'notes': t.notes,
            'timestamp': t.timestamp.isoformat(),
        }
        for t in c.timeline.all()
    ]


def format_complaint(c: Complaint) -> dict:
    resolution = None
    if c.resolved_at:
        resolution = {
            'summary': c.resolution_summary,
            'actionTaken': c.resolution_action,
            'resolvedBy': c.resolved_by,
            'resolvedAt': _iso(c.resolved_at),
            'patientSatisfaction': (
                {'rating': c.satisfaction_rating, 'feedback': c.satisfaction_feedback}
                if c.satisfaction_rating else None
            ),
        }
    return {
        'id': c.id,
        'complaintId': c.complaint_id,
        'patient': c.patient_id,
        'patientName': c.patient_name,
        'patientPhone': c.patient_phone,
        'title': c.title,
        'description': c.description,
        'category': c.category,
        'subcategory': c.subcategory,
        'urgency': c.urgency,
        'priority': c.priority,
        'status': c.status,
        'channel': c.channel,
        'language': c.language,
        'assignedTo': format_assignment(c),
        'aiAnalysis': c.ai_analysis,
        'timeline': format_timeline(c),
        'resolution': resolution,
        'sla': {
            'responseTime': c.sla_response_hours,
            'resolutionTime': c.sla_resolution_hours,
            'responseDeadline': _iso(c.sla_response_deadline),
            'resolutionDeadline': _iso(c.sla_resolution_deadline),
            'breached': c.sla_breached,
        },
        'escalation': {
            'level': c.escalation_level,
            'escalatedTo': c.escalated_to or None,
            'escalatedAt': _iso(c.escalated_at),
            'reason': c.escalation_reason or None,
            'autoEscalated': c.auto_escalated,
        },
        'relatedAppointment': c.related_appointment,
        'tags': c.tags,
        'isAnonymous': c.is_anonymous,
        'followUpRequired': c.follow_up_required,
        'followUpDate': _iso(c.follow_up_date),
        'createdAt': _iso(c.created_at),
        'updatedAt': _iso(c.updated_at),
        'ageInHours': c.age_in_hours,
        'slaStatus': c.sla_status,
    }


def format_complaint_public(c: Complaint) -> dict:
    return {
        'complaintId': c.complaint_id,
        'title': c.title,
        'category': c.category,
        'urgency': c.urgency,
        'status': c.status,
        'createdAt': _iso(c.created_at),
        'ageInHours': c.age_in_hours,
        'slaStatus': c.sla_status,
    }


def template_context(c: Complaint) -> dict:
    return {'complaintId': c.complaint_id, 'patientName': c.patient_name, 'category': c.category}
