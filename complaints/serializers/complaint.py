import bleach
from rest_framework import serializers
from rest_framework.settings import ISO_8601

from complaints.lexicons import CATEGORIES, URGENCIES
from complaints.models import Complaint


def _clean(v):
    return bleach.clean((v or '').strip(), strip=True)


class ActorSerializer(serializers.Serializer):
    """``{id, name, role}`` of whoever performed an action."""
    id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    role = serializers.CharField(required=False, allow_blank=True, max_length=64)


class ComplaintSubmitSerializer(serializers.Serializer):
    patientId = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    patientName = serializers.CharField(max_length=255)
    patientPhone = serializers.CharField(max_length=32)
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=2000)
    category = serializers.ChoiceField(choices=CATEGORIES, required=False, allow_null=True)
    urgency = serializers.ChoiceField(choices=URGENCIES, required=False, allow_null=True)
    channel = serializers.ChoiceField(choices=[c for c, _ in Complaint.CHANNEL_CHOICES], required=False, allow_null=True)
    language = serializers.ChoiceField(choices=[l for l, _ in Complaint.LANGUAGE_CHOICES], required=False, allow_null=True)
    isAnonymous = serializers.BooleanField(required=False, default=False)
    relatedAppointment = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    subcategory = serializers.CharField(required=False, allow_blank=True, default='', max_length=64)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False, max_length=20)
    priority = serializers.IntegerField(required=False, allow_null=True, min_value=1, max_value=5)

    def validate_title(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('title must not be empty')
        return v

    def validate_description(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('description must not be empty')
        return v

    def validate_patientName(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('patientName must not be empty')
        return v

    def validate_patientPhone(self, v):
        return _clean(v)

    def validate_subcategory(self, v):
        return _clean(v)

    def validate_tags(self, v):
        return [t for t in (_clean(t) for t in v) if t]


class AnalyzeSerializer(serializers.Serializer):
    text = serializers.CharField(trim_whitespace=False)
    title = serializers.CharField(required=False, allow_blank=True, default='', trim_whitespace=False)


# escalation and resolution carry their own details and have dedicated endpoints
STATUS_UPDATE_CHOICES = [
    s for s, _ in Complaint.STATUS_CHOICES
    if s not in (Complaint.STATUS_ESCALATED, Complaint.STATUS_RESOLVED)
]


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=STATUS_UPDATE_CHOICES)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    performedBy = ActorSerializer(required=False, allow_null=True)

    def validate_notes(self, v):
        return _clean(v)


class AssignSerializer(serializers.Serializer):
    staffId = serializers.CharField(max_length=64)
    staffName = serializers.CharField(max_length=255)
    department = serializers.CharField(max_length=255)


class EscalateSerializer(serializers.Serializer):
    reason = serializers.CharField()
    escalatedTo = serializers.CharField(max_length=255)
    performedBy = ActorSerializer(required=False, allow_null=True)

    def validate_reason(self, v):
        return _clean(v)


class ResolveSerializer(serializers.Serializer):
    summary = serializers.CharField()
    actionTaken = serializers.CharField(required=False, allow_blank=True, default='')
    resolvedBy = ActorSerializer(required=False, allow_null=True)
    followUpDate = serializers.DateTimeField(required=False, allow_null=True)

    def validate_summary(self, v):
        return _clean(v)

    def validate_actionTaken(self, v):
        return _clean(v)


class FeedbackSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    feedback = serializers.CharField(required=False, allow_blank=True, default='', max_length=2000)
    performedBy = ActorSerializer(required=False, allow_null=True)

    def validate_feedback(self, v):
        return _clean(v)


class AnalyticsQuerySerializer(serializers.Serializer):
    startDate = serializers.DateTimeField(required=False, input_formats=[ISO_8601, '%Y-%m-%d'])
    endDate = serializers.DateTimeField(required=False, input_formats=[ISO_8601, '%Y-%m-%d'])

    def validate(self, attrs):
        start, end = attrs.get('startDate'), attrs.get('endDate')
        if start and end and start > end:
            raise serializers.ValidationError('startDate must not be after endDate')
        return attrs
