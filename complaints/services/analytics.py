from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Optional

from django.db.models import Avg
from django.utils import timezone

from complaints.models import Complaint

DEFAULT_WINDOW_DAYS = 30


def complaint_analytics(start: Optional[datetime] = None, end: Optional[datetime] = None) -> dict:
    """Aggregate complaints created between ``start`` and ``end`` (inclusive).

    The window defaults to the last 30 days.
    """
    end = end or timezone.now()
    start = start or end - timedelta(days=DEFAULT_WINDOW_DAYS)
    qs = Complaint.objects.filter(created_at__gte=start, created_at__lte=end)

    by_category: Counter = Counter()
    by_status: Counter = Counter()
    by_urgency: Counter = Counter()
    for category, status, urgency in qs.values_list('category', 'status', 'urgency'):
        by_category[category] += 1
        by_status[status] += 1
        by_urgency[urgency] += 1

    averages = qs.aggregate(
        resolution=Avg('sla_resolution_hours'),
        satisfaction=Avg('satisfaction_rating'),
    )
    return {
        'totalComplaints': sum(by_status.values()),
        'byCategory': dict(by_category),
        'byStatus': dict(by_status),
        'byUrgency': dict(by_urgency),
        'avgResolutionTime': _rounded(averages['resolution']),
        'satisfactionRating': _rounded(averages['satisfaction']),
        'window': {'start': start.isoformat(), 'end': end.isoformat()},
    }


def _rounded(value) -> Optional[float]:
    return round(float(value), 2) if value is not None else None
