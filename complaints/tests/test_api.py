"""
Integration tests for the complaint API.

The tests drive every endpoint through Django REST Framework's APIClient
and check the ``{"success": ..., "data": ...}`` envelope, status codes
and the lifecycle rules enforced on complaints.

To run the tests:

```
pytest -q complaints/tests
```
"""
from datetime import timedelta

from django.core.cache import cache
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from ..models import Complaint


class ComplaintAPITests(APITestCase):
    def setUp(self) -> None:
        cache.clear()
        self.payload = {
            'patientId': 'P100',
            'patientName': 'Asha Menon',
            'patientPhone': '9800000001',
            'title': 'Rude doctor',
            'description': 'The doctor was rude and ignored my questions',
        }

    def submit(self, **overrides) -> dict:
        data = dict(self.payload, **overrides)
        resp = self.client.post(reverse('complaint_submit'), data, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.data)
        return resp.data['data']

    def test_submit_complaint(self):
        resp = self.client.post(reverse('complaint_submit'), self.payload, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertTrue(resp.data['success'])
        self.assertEqual(resp.data['message'], 'Complaint submitted successfully')
        data = resp.data['data']
        self.assertTrue(data['complaintId'].startswith('CMP'))
        self.assertEqual(data['category'], 'doctor_behavior')
        self.assertEqual(data['urgency'], 'medium')
        self.assertEqual(data['status'], 'in_progress')
        self.assertEqual(data['assignedTo']['department'], 'Medical Affairs')
        self.assertTrue(Complaint.objects.filter(complaint_id=data['complaintId']).exists())

    def test_submit_low_urgency_is_unassigned(self):
        data = self.submit(title='Feedback', description='A small suggestion about the signs')
        self.assertEqual(data['urgency'], 'low')
        self.assertEqual(data['status'], 'open')
        self.assertIsNone(data['assignedTo'])

    def test_submit_requires_fields(self):
        resp = self.client.post(reverse('complaint_submit'), {'title': 'Only a title'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.data['success'])
        self.assertIn('description', resp.data['errors'])
        self.assertIn('patientName', resp.data['errors'])

    def test_submit_rejects_unknown_category(self):
        resp = self.client.post(reverse('complaint_submit'), dict(self.payload, category='parking_fines'),
                                format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('category', resp.data['errors'])

    def test_submit_strips_markup(self):
        data = self.submit(description='<script>x</script>The nurse was rude')
        complaint = Complaint.objects.get(complaint_id=data['complaintId'])
        self.assertNotIn('<script>', complaint.description)

    def test_analyze(self):
        resp = self.client.post(reverse('complaint_analyze'),
                                {'text': 'This is an emergency, I am in severe pain'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.data['data']
        self.assertEqual(data['urgencyScore'], 'critical')
        self.assertEqual(data['similarComplaints'], [])
        self.assertEqual(Complaint.objects.count(), 0)

    def test_analyze_requires_text(self):
        for body in ({}, {'text': ''}):
            resp = self.client.post(reverse('complaint_analyze'), body, format='json')
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(resp.data, {'success': False, 'message': 'Text is required for analysis'})

    def test_detail(self):
        cid = self.submit()['complaintId']
        resp = self.client.get(reverse('complaint_detail', args=[cid]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.data['data']
        self.assertEqual(data['complaintId'], cid)
        self.assertEqual(data['patientName'], 'Asha Menon')
        self.assertEqual([t['action'] for t in data['timeline']], ['created', 'assigned'])
        self.assertEqual(data['aiAnalysis']['suggestedCategory'], 'doctor_behavior')

    def test_detail_not_found(self):
        resp = self.client.get(reverse('complaint_detail', args=['CMP000000000000']))
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data['message'], 'Complaint not found')

    def test_response_template(self):
        cid = self.submit(title='Bill', description='I was overcharged on my invoice, this is a problem')['complaintId']
        resp = self.client.get(reverse('complaint_response_template', args=[cid]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        template = resp.data['data']['template']
        self.assertIn('Dear Asha Menon', template)
        self.assertIn(cid, template)

    def test_patient_complaints(self):
        self.submit()
        self.submit(patientId='P200')
        resp = self.client.get(reverse('complaint_patient_list', args=['P100']))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data['data']), 1)
        resp = self.client.get(reverse('complaint_patient_list', args=['P999']))
        self.assertEqual(resp.data['data'], [])

    def test_status_update_and_invalid_transition(self):
        cid = self.submit()['complaintId']
        url = reverse('complaint_update_status', args=[cid])
        resp = self.client.put(url, {
            'status': 'closed',
            'notes': 'duplicate',
            'performedBy': {'id': 's1', 'name': 'Desk', 'role': 'staff'},
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['data']['status'], 'closed')
        self.assertEqual(resp.data['data']['timeline'][-1]['performedBy']['name'], 'Desk')

        resp = self.client.put(url, {'status': 'open'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.data['success'])

        resp = self.client.put(url, {'status': 'archived'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_lifecycle_on_missing_complaint(self):
        for name, body in (
            ('complaint_update_status', {'status': 'closed'}),
            ('complaint_assign', {'staffId': 's1', 'staffName': 'A', 'department': 'B'}),
            ('complaint_escalate', {'reason': 'r', 'escalatedTo': 'CEO'}),
            ('complaint_resolve', {'summary': 'done'}),
        ):
            resp = self.client.put(reverse(name, args=['CMP000000000000']), body, format='json')
            self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND, name)

    def test_assign(self):
        cid = self.submit(title='Feedback', description='A small suggestion about the signs')['complaintId']
        resp = self.client.put(reverse('complaint_assign', args=[cid]), {
            'staffId': 'staff_maria_garcia', 'staffName': 'Maria Garcia', 'department': 'Patient Services',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.data['data']
        self.assertEqual(data['status'], 'in_progress')
        self.assertEqual(data['assignedTo']['staffName'], 'Maria Garcia')

    def test_escalate_and_resolve(self):
        cid = self.submit()['complaintId']
        resp = self.client.put(reverse('complaint_escalate', args=[cid]), {
            'reason': 'No response from department', 'escalatedTo': 'Medical Director',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['data']['status'], 'escalated')
        self.assertEqual(resp.data['data']['escalation']['level'], 1)

        resp = self.client.put(reverse('complaint_resolve', args=[cid]), {
            'summary': 'Apologised to the patient', 'actionTaken': 'Counselling session',
            'resolvedBy': {'id': 'a1', 'name': 'Director', 'role': 'admin'},
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        resolution = resp.data['data']['resolution']
        self.assertEqual(resolution['summary'], 'Apologised to the patient')
        self.assertEqual(resolution['resolvedBy']['name'], 'Director')

        self.client.put(reverse('complaint_update_status', args=[cid]), {'status': 'closed'}, format='json')
        resp = self.client.put(reverse('complaint_escalate', args=[cid]), {
            'reason': 'again', 'escalatedTo': 'CEO',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_open_list_is_sorted(self):
        low = self.submit(title='Feedback', description='A small suggestion about the signs')['complaintId']
        critical = self.submit(title='Emergency', description='Emergency, the equipment is broken')['complaintId']
        medium = self.submit()['complaintId']
        resp = self.client.get(reverse('complaint_admin_open'))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([c['complaintId'] for c in resp.data['data']], [critical, medium, low])

    def test_admin_overdue(self):
        cid = self.submit(title='Feedback', description='A small suggestion about the signs')['complaintId']
        self.submit()
        Complaint.objects.filter(complaint_id=cid).update(
            sla_response_deadline=timezone.now() - timedelta(hours=1),
        )
        resp = self.client.get(reverse('complaint_admin_overdue'))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([c['complaintId'] for c in resp.data['data']], [cid])

    def test_admin_analytics(self):
        self.submit()
        self.submit(title='Feedback', description='A small suggestion about the signs')
        resp = self.client.get(reverse('complaint_admin_analytics'))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.data['data']
        self.assertEqual(data['totalComplaints'], 2)
        self.assertEqual(data['byUrgency'], {'medium': 1, 'low': 1})
        self.assertEqual(data['byStatus'], {'in_progress': 1, 'open': 1})

    def test_admin_analytics_rejects_inverted_window(self):
        resp = self.client.get(reverse('complaint_admin_analytics'),
                               {'startDate': '2026-02-01', 'endDate': '2026-01-01'})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.data['success'])

    def test_healthz(self):
        resp = self.client.get('/healthz')
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()['success'])

    def test_patient_complaints_are_summaries(self):
        cid = self.submit()['complaintId']
        resp = self.client.get(reverse('complaint_patient_list', args=['P100']))
        item = resp.data['data'][0]
        self.assertEqual(item['complaintId'], cid)
        self.assertEqual(item['status'], 'in_progress')
        self.assertIn('slaStatus', item)
        self.assertNotIn('patientPhone', item)
        self.assertNotIn('timeline', item)

    def test_submit_analysis_matches_analyze_for_escaped_characters(self):
        title, description = 'Bill & refund', 'Waited > 3 hours & then was overcharged on the bill'
        cid = self.submit(title=title, description=description)['complaintId']
        complaint = Complaint.objects.get(complaint_id=cid)
        resp = self.client.post(reverse('complaint_analyze'), {'text': description, 'title': title}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(complaint.ai_analysis, resp.data['data'])
        self.assertNotIn('&amp;', complaint.ai_analysis['keywords'])

    def test_submit_optional_classification_fields(self):
        cid = self.submit(subcategory='night shift', tags=['ward 4', '<b>repeat</b>'], priority=1)['complaintId']
        complaint = Complaint.objects.get(complaint_id=cid)
        self.assertEqual(complaint.subcategory, 'night shift')
        self.assertEqual(complaint.tags, ['ward 4', 'repeat'])
        self.assertEqual(complaint.priority, 1)
        resp = self.client.post(reverse('complaint_submit'), dict(self.payload, priority=9), format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_status_endpoint_rejects_escalated_and_resolved(self):
        cid = self.submit()['complaintId']
        for target in ('escalated', 'resolved'):
            resp = self.client.put(reverse('complaint_update_status', args=[cid]), {'status': target}, format='json')
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, target)
            self.assertIn('status', resp.data['errors'])
        complaint = Complaint.objects.get(complaint_id=cid)
        self.assertEqual(complaint.status, 'in_progress')
        self.assertIsNone(complaint.resolved_at)

    def test_resolve_with_follow_up_and_feedback(self):
        cid = self.submit()['complaintId']
        resp = self.client.put(reverse('complaint_feedback', args=[cid]), {'rating': 4}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        resp = self.client.put(reverse('complaint_resolve', args=[cid]), {
            'summary': 'Apologised', 'followUpDate': '2030-01-15T10:00:00Z',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertTrue(resp.data['data']['followUpRequired'])
        self.assertTrue(resp.data['data']['followUpDate'].startswith('2030-01-15'))

        resp = self.client.put(reverse('complaint_feedback', args=[cid]), {'rating': 6}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        resp = self.client.put(reverse('complaint_feedback', args=[cid]), {
            'rating': 4, 'feedback': 'Handled well',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        satisfaction = resp.data['data']['resolution']['patientSatisfaction']
        self.assertEqual(satisfaction, {'rating': 4, 'feedback': 'Handled well'})
        self.assertEqual(resp.data['data']['timeline'][-1]['action'], 'feedback')

        resp = self.client.get(reverse('complaint_admin_analytics'))
        self.assertEqual(resp.data['data']['satisfactionRating'], 4.0)
