"""Category based routing of complaints to a department contact."""
from __future__ import annotations

import re
from dataclasses import dataclass

ASSIGNMENT_RULES: dict[str, tuple[str, str]] = {
    # category: (department, staff name)
    'appointment_scheduling': ('Patient Services', 'Sarah Johnson'),
    'doctor_behavior': ('Medical Affairs', 'Dr. Michael Chen'),
    'staff_behavior': ('HR Department', 'Lisa Rodriguez'),
    'facility_cleanliness': ('Facilities Management', 'David Kim'),
    'waiting_time': ('Operations', 'Emily Davis'),
    'billing_issues': ('Billing Department', 'Robert Wilson'),
    'medical_care_quality': ('Quality Assurance', 'Dr. Jennifer Lee'),
    'prescription_issues': ('Pharmacy', 'Mark Thompson'),
    'equipment_malfunction': ('IT Support', 'Alex Martinez'),
    'accessibility_issues': ('Patient Services', 'Maria Garcia'),
    'privacy_concerns': ('Compliance', 'James Anderson'),
    'communication_issues': ('Patient Relations', 'Anna Patel'),
}

FALLBACK_ASSIGNMENT = ('General Support', 'Support Team')


@dataclass(frozen=True)
class Assignment:
    staff_id: str
    staff_name: str
    department: str

    def as_dict(self) -> dict:
        return {'staffId': self.staff_id, 'staffName': self.staff_name, 'department': self.department}


def staff_id_for(staff_name: str) -> str:
    return 'staff_' + re.sub(r'\s+', '_', staff_name).lower()


def assign(category: str) -> Assignment:
    """Return the department contact responsible for ``category``.

    Unknown categories (including ``other``) go to general support.
    """
    department, staff_name = ASSIGNMENT_RULES.get(category, FALLBACK_ASSIGNMENT)
    return Assignment(staff_id=staff_id_for(staff_name), staff_name=staff_name, department=department)
