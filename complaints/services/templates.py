"""Canned first replies sent back to complainants."""
from __future__ import annotations

import re
from typing import Mapping

TEMPLATES: dict[str, str] = {
    'appointment_scheduling': """Dear {patientName},

Thank you for bringing this appointment scheduling concern to our attention. We understand how important it is to have a smooth booking experience.

We are reviewing your case ({complaintId}) and will work to resolve this issue promptly. Our Patient Services team will contact you within 24 hours to address your scheduling needs.

Best regards,
HealthTech Patient Services Team""",

    'doctor_behavior': """Dear {patientName},

We take all concerns about our medical staff very seriously. Your feedback regarding your experience is important to us and helps us maintain the highest standards of care.

We have forwarded your complaint ({complaintId}) to our Medical Affairs department for immediate review. A senior medical administrator will investigate this matter and contact you within 48 hours.

We are committed to ensuring all patients receive respectful and professional care.

Sincerely,
HealthTech Medical Affairs""",

    'billing_issues': """Dear {patientName},

Thank you for contacting us regarding your billing concern. We understand how frustrating billing issues can be and we're here to help resolve this matter quickly.

Our Billing Department is reviewing your case ({complaintId}) and will contact you within 24 hours with a detailed explanation and resolution.

If you have any immediate questions, please call our billing hotline at (555) 123-4567.

Best regards,
HealthTech Billing Department""",
}

_PLACEHOLDER = re.compile(r"\{(patientName|complaintId)\}")

GENERIC_TEMPLATE = """Dear {patientName},

Thank you for your feedback. We have received your complaint ({complaintId}) and are reviewing it carefully.

Our team will investigate this matter and respond to you within 48 hours.

We appreciate your patience and the opportunity to address your concerns.

Best regards,
HealthTech Support Team"""


def render_template(complaint: Mapping) -> str:
    """Render the reply for ``complaint`` (``complaintId``, ``patientName``, ``category``).

    Categories without a dedicated template use the generic text.
    """
    template = TEMPLATES.get(str(complaint.get('category')), GENERIC_TEMPLATE)
    values = {
        'patientName': str(complaint.get('patientName') or ''),
        'complaintId': str(complaint.get('complaintId') or ''),
    }
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)
