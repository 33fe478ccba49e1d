"""
Static keyword tables used to classify complaint text.

Every table is an ordered tuple so that severity and tie-breaking never
depend on dictionary iteration order.  The tables are built once at import
time and must be treated as read-only.
"""
from __future__ import annotations

OTHER_CATEGORY = 'other'

CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ('appointment_scheduling', (
        'appointment', 'booking', 'schedule', 'reschedule', 'cancel', 'slot', 'time', 'date',
        'availability', 'waiting list', 'confirmation', 'reminder',
    )),
    ('doctor_behavior', (
        'doctor', 'physician', 'rude', 'unprofessional', 'attitude', 'behavior', 'treatment',
        'consultation', 'diagnosis', 'bedside manner', 'communication',
    )),
    ('staff_behavior', (
        'staff', 'nurse', 'receptionist', 'rude', 'unprofessional', 'attitude', 'behavior',
        'service', 'help', 'assistance', 'front desk',
    )),
    ('facility_cleanliness', (
        'dirty', 'clean', 'hygiene', 'sanitize', 'bathroom', 'room', 'facility', 'maintenance',
        'smell', 'garbage', 'infection control',
    )),
    ('waiting_time', (
        'wait', 'delay', 'long', 'queue', 'time', 'hours', 'late', 'punctual', 'schedule',
        'appointment time', 'delayed',
    )),
    ('billing_issues', (
        'bill', 'payment', 'charge', 'cost', 'insurance', 'claim', 'refund', 'overcharge',
        'billing error', 'invoice', 'money',
    )),
    ('medical_care_quality', (
        'treatment', 'care', 'medical', 'diagnosis', 'medication', 'procedure', 'surgery',
        'quality', 'standard', 'protocol', 'negligence',
    )),
    ('prescription_issues', (
        'prescription', 'medicine', 'drug', 'medication', 'pharmacy', 'dosage', 'side effect',
        'allergy', 'wrong medicine',
    )),
    ('equipment_malfunction', (
        'equipment', 'machine', 'device', 'broken', 'malfunction', 'not working', 'technical',
        'system down', 'error',
    )),
    ('accessibility_issues', (
        'wheelchair', 'disabled', 'accessibility', 'ramp', 'elevator', 'parking', 'access',
        'mobility', 'barrier',
    )),
    # 'HIPAA' is matched against lowercased text and therefore never hits.
    ('privacy_concerns', (
        'privacy', 'confidential', 'personal', 'information', 'data', 'security', 'HIPAA',
        'disclosure', 'unauthorized',
    )),
    ('communication_issues', (
        'communication', 'language', 'understand', 'explain', 'information', 'unclear',
        'confusing', 'translator', 'interpreter',
    )),
)

CATEGORIES: tuple[str, ...] = tuple(label for label, _ in CATEGORY_KEYWORDS) + (OTHER_CATEGORY,)

# (label, rank, keywords), highest rank first.
URGENCY_LEVELS: tuple[tuple[str, int, tuple[str, ...]], ...] = (
    ('critical', 4, (
        'emergency', 'urgent', 'critical', 'life threatening', 'severe', 'immediate',
        'dangerous', 'serious injury', 'malpractice', 'death', 'dying',
    )),
    ('high', 3, (
        'pain', 'suffering', 'discrimination', 'harassment', 'negligence', 'unsafe',
        'infection', 'contamination', 'allergic reaction',
    )),
    ('medium', 2, (
        'disappointed', 'unsatisfied', 'concern', 'issue', 'problem', 'complaint',
        'improvement needed',
    )),
    ('low', 1, (
        'suggestion', 'feedback', 'minor', 'small issue', 'recommendation',
    )),
)

URGENCIES: tuple[str, ...] = tuple(label for label, _, _ in URGENCY_LEVELS)
URGENCY_RANK: dict[str, int] = {label: rank for label, rank, _ in URGENCY_LEVELS}
DEFAULT_URGENCY = 'medium'

# (label, weight, keywords), most negative first.
SENTIMENT_LEVELS: tuple[tuple[str, int, tuple[str, ...]], ...] = (
    ('very_negative', -3, (
        'terrible', 'horrible', 'worst', 'disgusting', 'outrageous', 'unacceptable',
        'furious', 'angry', 'hate', 'never again',
    )),
    ('negative', -1, (
        'bad', 'poor', 'disappointing', 'unsatisfied', 'unhappy', 'frustrated',
        'annoyed', 'upset', 'dissatisfied',
    )),
    ('neutral', 0, (
        'okay', 'average', 'normal', 'standard', 'regular', 'fine',
    )),
    ('positive', 2, (
        'good', 'satisfied', 'happy', 'pleased', 'thank you', 'appreciate',
        'excellent', 'great', 'wonderful',
    )),
)

SENTIMENTS: tuple[str, ...] = tuple(label for label, _, _ in SENTIMENT_LEVELS)

CAPS_MARKER = 'CAPS'

EMPHASIS_WORDS: tuple[str, ...] = (
    'very', 'extremely', 'really', 'absolutely', 'completely', 'totally',
    '!!!', CAPS_MARKER, 'urgent', 'immediate', 'serious', 'critical',
)

STOPWORDS: frozenset[str] = frozenset({
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with',
    'by', 'is', 'was', 'are', 'were', 'be', 'been', 'have', 'has', 'had', 'do', 'does',
    'did', 'will', 'would', 'could', 'should', 'may', 'might', 'can', 'this', 'that',
    'these', 'those', 'i', 'you', 'he', 'she', 'it', 'we', 'they', 'me', 'him', 'her',
    'us', 'them', 'my', 'your', 'his', 'its', 'our', 'their',
})
