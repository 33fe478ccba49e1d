"""
Management command to populate the database with demo complaints.
"""
import random

from django.core.management.base import BaseCommand

from complaints.services.intake import submit_complaint

SAMPLES = [
    ('Appointment cancelled twice',
     'My appointment was cancelled twice without any confirmation or reminder. I need to reschedule.'),
    ('Rude doctor',
     'The doctor was rude and unprofessional during the consultation and did not explain the diagnosis.'),
    ('Overcharged on my bill',
     'I was overcharged on my bill and the insurance claim was rejected. I want a refund.'),
    ('Dirty bathroom',
     'The bathroom near the ward was dirty and there was a terrible smell. Hygiene is a serious concern.'),
    ('Waited four hours',
     'I had to wait for hours in the queue, the doctor was very late. This delay is unacceptable.'),
    ('Wrong medicine given',
     'The pharmacy gave me the wrong medicine and I had an allergic reaction. This is an emergency!'),
    ('Broken wheelchair ramp',
     'The wheelchair ramp at the parking entrance is broken, accessibility for disabled patients is poor.'),
    ('Suggestion for the waiting area',
     'A small suggestion: more seating in the waiting area would be nice. Thank you for the good service.'),
]

NAMES = ['Asha Menon', 'Ravi Kumar', 'Priya Nair', 'John Mathew', 'Fatima Sheikh', 'Arjun Das']
CHANNELS = ['web', 'sms', 'whatsapp', 'phone', 'email']


class Command(BaseCommand):
    help = 'Populate database with demo complaints'

    def add_arguments(self, parser):
        parser.add_argument('--count', type=int, default=len(SAMPLES), help='number of complaints to create')

    def handle(self, *args, **options):
        count = max(0, options['count'])
        self.stdout.write(f'Creating {count} demo complaints...')
        for i in range(count):
            title, description = SAMPLES[i % len(SAMPLES)]
            name = random.choice(NAMES)
            complaint = submit_complaint(
                title=title,
                description=description,
                patient_name=name,
                patient_phone=f'98{random.randint(10000000, 99999999)}',
                patient_id=f'P{1000 + i}',
                channel=random.choice(CHANNELS),
            )
            self.stdout.write(
                f'  {complaint.complaint_id} {complaint.category}/{complaint.urgency} -> '
                f'{complaint.assigned_department or "unassigned"}'
            )
        self.stdout.write(self.style.SUCCESS('Demo complaints created.'))
