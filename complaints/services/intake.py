"""
Complaint intake: analyse, persist and route a newly submitted complaint.
"""
from __future__ import annotations

import html
import logging
from typing import Optional

from django.db import transaction

from complaints.models import DEFAULT_PRIORITY, Complaint
from complaints.services.analysis import analyze
from complaints.services.assignment import assign

logger = logging.getLogger(__name__)


@transaction.atomic
def submit_complaint(
    *,
    title: str,
    description: str,
    patient_name: str,
    patient_phone: str,
    patient_id: Optional[str] = None,
    category: Optional[str] = None,
    urgency: Optional[str] = None,
    channel: Optional[str] = None,
    language: Optional[str] = None,
    is_anonymous: bool = False,
    related_appointment: Optional[str] = None,
    subcategory: str = '',
    tags: Optional[list] = None,
    priority: Optional[int] = None,
) -> Complaint:
    """Create a complaint from raw intake fields.

    The analysis supplies ``category`` and ``urgency`` when the caller left
    them out.  Complaints whose final urgency is not ``low`` are routed to
    a department contact straight away.  Text that was HTML-escaped for
    storage is analysed in its unescaped form.
    """
    analysis = analyze(html.unescape(description or ''), html.unescape(title or ''))
    complaint = Complaint.objects.create(
        patient_id=patient_id or None,
        patient_name=patient_name,
        patient_phone=patient_phone,
        title=title,
        description=description,
        category=category or analysis.suggested_category,
        urgency=urgency or analysis.urgency_score,
        channel=channel or 'web',
        language=language or 'en',
        is_anonymous=bool(is_anonymous),
        related_appointment=related_appointment or None,
        subcategory=subcategory or '',
        tags=list(tags or []),
        priority=priority or DEFAULT_PRIORITY,
        ai_analysis=analysis.as_dict(),
    )
    complaint.add_timeline_entry(
        'created',
        'Complaint submitted',
        {'id': patient_id, 'name': patient_name, 'role': 'patient'},
    )
    logger.info(
        "complaint %s submitted: category=%s urgency=%s sentiment=%s confidence=%.2f",
        complaint.complaint_id, complaint.category, complaint.urgency,
        analysis.sentiment, analysis.confidence_score,
    )

    if complaint.urgency != 'low':
        assignment = assign(complaint.category)
        complaint.assign_to(assignment.staff_id, assignment.staff_name, assignment.department)
        logger.info("complaint %s assigned to %s (%s)",
                    complaint.complaint_id, assignment.staff_name, assignment.department)
    return complaint
