"""
Complaint intake and management endpoints.

Patients submit complaints and may ask for a free-text analysis before
submitting.  Staff fetch individual complaints, the open and overdue
work lists and analytics, and move complaints through their lifecycle
(status changes, assignment, escalation, resolution).  Every response
uses the ``{"success": ..., "data": ...}`` envelope.
"""
from __future__ import annotations

from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..serializers.complaint import (
    AnalyticsQuerySerializer,
    AnalyzeSerializer,
    AssignSerializer,
    ComplaintSubmitSerializer,
    EscalateSerializer,
    FeedbackSerializer,
    ResolveSerializer,
    StatusUpdateSerializer,
)
from ..services.analysis import analyze
from ..services.analytics import complaint_analytics
from ..services.intake import submit_complaint
from ..services.records import (
    format_assignment,
    format_complaint,
    format_complaint_public,
    complaints_for_patient,
    get_complaint,
    open_complaints,
    overdue_complaints,
    template_context,
)
from ..services.templates import render_template


def _ok(data, message=None, status_code=status.HTTP_200_OK) -> Response:
    body = {'success': True}
    if message:
        body['message'] = message
    body['data'] = data
    return Response(body, status=status_code)


def _fail(message, status_code) -> Response:
    return Response({'success': False, 'message': message}, status=status_code)


def _not_found() -> Response:
    return _fail('Complaint not found', status.HTTP_404_NOT_FOUND)


@api_view(['POST'])
@permission_classes([AllowAny])
def complaint_submit(request):
    """Submit a new complaint.

    Category and urgency are taken from the analysis when omitted.  The
    response contains the generated ``complaintId`` and the assignment
    (``null`` for low urgency complaints, which wait for manual triage).
    """
    s = ComplaintSubmitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    d = s.validated_data
    complaint = submit_complaint(
        title=d['title'],
        description=d['description'],
        patient_name=d['patientName'],
        patient_phone=d['patientPhone'],
        patient_id=d.get('patientId'),
        category=d.get('category'),
        urgency=d.get('urgency'),
        channel=d.get('channel'),
        language=d.get('language'),
        is_anonymous=d.get('isAnonymous', False),
        related_appointment=d.get('relatedAppointment'),
        subcategory=d.get('subcategory', ''),
        tags=d.get('tags'),
        priority=d.get('priority'),
    )
    return _ok(
        {
            'complaintId': complaint.complaint_id,
            'status': complaint.status,
            'urgency': complaint.urgency,
            'category': complaint.category,
            'assignedTo': format_assignment(complaint),
        },
        message='Complaint submitted successfully',
        status_code=status.HTTP_201_CREATED,
    )


@api_view(['POST'])
@permission_classes([AllowAny])
def complaint_analyze(request):
    """Analyse free text without storing anything."""
    s = AnalyzeSerializer(data=request.data)
    if not s.is_valid():
        return _fail('Text is required for analysis', status.HTTP_400_BAD_REQUEST)
    result = analyze(s.validated_data['text'], s.validated_data.get('title', ''))
    return _ok(result.as_dict())


@api_view(['GET'])
@permission_classes([AllowAny])
def complaint_detail(request, complaint_id: str):
    complaint = get_complaint(complaint_id)
    if not complaint:
        return _not_found()
    return _ok(format_complaint(complaint))


@api_view(['GET'])
@permission_classes([AllowAny])
def complaint_response_template(request, complaint_id: str):
    """Return the canned first reply for a complaint."""
    complaint = get_complaint(complaint_id)
    if not complaint:
        return _not_found()
    return _ok({'complaintId': complaint.complaint_id, 'template': render_template(template_context(complaint))})


@api_view(['GET'])
@permission_classes([AllowAny])
def patient_complaints(request, patient_id: str):
    """Summaries of a patient's complaints, newest first."""
    return _ok([format_complaint_public(c) for c in complaints_for_patient(patient_id)])


@api_view(['GET'])
@permission_classes([AllowAny])
def admin_open_complaints(request):
    """Open, in-progress and escalated complaints, most urgent first."""
    return _ok([format_complaint(c) for c in open_complaints()])


@api_view(['GET'])
@permission_classes([AllowAny])
def admin_overdue_complaints(request):
    return _ok([format_complaint(c) for c in overdue_complaints()])


@api_view(['GET'])
@permission_classes([AllowAny])
def admin_complaint_analytics(request):
    """Complaint counts by category, status and urgency (cached)."""
    q = AnalyticsQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    start, end = q.validated_data.get('startDate'), q.validated_data.get('endDate')
    ck = f"complaints:analytics:{start.isoformat() if start else ''}:{end.isoformat() if end else ''}"
    cached = cache.get(ck)
    if cached:
        return _ok(cached)
    data = complaint_analytics(start, end)
    # an open-ended window moves with the clock; only cache explicit ones
    if end is not None:
        cache.set(ck, data, settings.COMPLAINT_ANALYTICS_CACHE_SECONDS)
    return _ok(data)


@api_view(['PUT'])
@permission_classes([AllowAny])
def complaint_update_status(request, complaint_id: str):
    s = StatusUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    complaint = get_complaint(complaint_id)
    if not complaint:
        return _not_found()
    try:
        complaint.update_status(
            s.validated_data['status'],
            s.validated_data.get('performedBy'),
            s.validated_data.get('notes', ''),
        )
    except ValueError as e:
        return _fail(str(e), status.HTTP_400_BAD_REQUEST)
    return _ok(format_complaint(complaint), message='Complaint status updated successfully')


@api_view(['PUT'])
@permission_classes([AllowAny])
def complaint_assign(request, complaint_id: str):
    s = AssignSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    complaint = get_complaint(complaint_id)
    if not complaint:
        return _not_found()
    complaint.assign_to(s.validated_data['staffId'], s.validated_data['staffName'], s.validated_data['department'])
    return _ok(format_complaint(complaint), message='Complaint assigned successfully')


@api_view(['PUT'])
@permission_classes([AllowAny])
def complaint_escalate(request, complaint_id: str):
    s = EscalateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    complaint = get_complaint(complaint_id)
    if not complaint:
        return _not_found()
    try:
        complaint.escalate(
            s.validated_data['reason'],
            s.validated_data['escalatedTo'],
            s.validated_data.get('performedBy'),
        )
    except ValueError as e:
        return _fail(str(e), status.HTTP_400_BAD_REQUEST)
    return _ok(format_complaint(complaint), message='Complaint escalated successfully')


@api_view(['PUT'])
@permission_classes([AllowAny])
def complaint_resolve(request, complaint_id: str):
    s = ResolveSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    complaint = get_complaint(complaint_id)
    if not complaint:
        return _not_found()
    try:
        complaint.resolve(
            s.validated_data['summary'],
            s.validated_data.get('actionTaken', ''),
            s.validated_data.get('resolvedBy'),
            s.validated_data.get('followUpDate'),
        )
    except ValueError as e:
        return _fail(str(e), status.HTTP_400_BAD_REQUEST)
    return _ok(format_complaint(complaint), message='Complaint resolved successfully')


@api_view(['PUT'])
@permission_classes([AllowAny])
def complaint_feedback(request, complaint_id: str):
    """Record the patient's 1-5 satisfaction rating on a resolved complaint."""
    s = FeedbackSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    complaint = get_complaint(complaint_id)
    if not complaint:
        return _not_found()
    try:
        complaint.record_feedback(
            s.validated_data['rating'],
            s.validated_data.get('feedback', ''),
            s.validated_data.get('performedBy'),
        )
    except ValueError as e:
        return _fail(str(e), status.HTTP_400_BAD_REQUEST)
    return _ok(format_complaint(complaint), message='Feedback recorded successfully')
