"""
Management command marking complaints whose SLA deadlines have passed.
"""
import logging

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from complaints.models import Complaint
from complaints.services.records import overdue_complaints

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Flag complaints that breached their SLA; optionally auto-escalate them."

    def add_arguments(self, parser):
        parser.add_argument('--escalate', action='store_true', help='escalate each newly breached complaint')
        parser.add_argument('--escalate-to', default=None, help='escalation contact (defaults to settings)')

    def handle(self, *args, **options):
        now = timezone.now()
        escalate_to = options['escalate_to'] or settings.COMPLAINT_ESCALATION_CONTACT
        flagged = escalated = 0
        for complaint in overdue_complaints(now):
            if complaint.sla_breached:
                continue
            complaint.sla_breached = True
            complaint.save(update_fields=['sla_breached', 'updated_at'])
            flagged += 1
            logger.warning("complaint %s breached its SLA (%s)", complaint.complaint_id, complaint.sla_status)
            if options['escalate'] and complaint.status != Complaint.STATUS_ESCALATED:
                complaint.escalate(
                    f"SLA breached ({complaint.sla_status})",
                    escalate_to,
                    auto=True,
                )
                escalated += 1
        self.stdout.write(self.style.SUCCESS(f"Flagged {flagged} complaints, escalated {escalated} at {now}"))
