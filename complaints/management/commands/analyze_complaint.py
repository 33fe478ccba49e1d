import json

from django.core.management.base import BaseCommand

from complaints.services.analysis import analyze
from complaints.services.assignment import assign


class Command(BaseCommand):
    help = "Analyse complaint text and show how it would be routed."

    def add_arguments(self, parser):
        parser.add_argument('text', help='complaint description')
        parser.add_argument('--title', default='', help='optional complaint title')

    def handle(self, *args, **options):
        result = analyze(options['text'], options['title'])
        payload = {'analysis': result.as_dict()}
        if result.urgency_score != 'low':
            payload['assignment'] = assign(result.suggested_category).as_dict()
        else:
            payload['assignment'] = None
        self.stdout.write(json.dumps(payload, indent=2))
