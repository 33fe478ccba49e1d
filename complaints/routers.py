"""
URL mappings for the complaint API.

Trailing slashes are deliberately omitted.  Fixed admin/patient paths
are listed before the ``<complaint_id>`` catch-all.
"""
from django.urls import path, include

from .views import health
from .views.complaints import (
    complaint_submit,
    complaint_analyze,
    complaint_detail,
    complaint_response_template,
    patient_complaints,
    admin_open_complaints,
    admin_overdue_complaints,
    admin_complaint_analytics,
    complaint_update_status,
    complaint_assign,
    complaint_escalate,
    complaint_resolve,
    complaint_feedback,
)


urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Intake
    path('api/complaints/submit', complaint_submit, name='complaint_submit'),
    path('api/complaints/analyze', complaint_analyze, name='complaint_analyze'),
    # Work lists & analytics
    path('api/complaints/admin/open', admin_open_complaints, name='complaint_admin_open'),
    path('api/complaints/admin/overdue', admin_overdue_complaints, name='complaint_admin_overdue'),
    path('api/complaints/admin/analytics', admin_complaint_analytics, name='complaint_admin_analytics'),
    path('api/complaints/patient/<str:patient_id>', patient_complaints, name='complaint_patient_list'),
    # Single complaint
    path('api/complaints/<str:complaint_id>', complaint_detail, name='complaint_detail'),
    path('api/complaints/<str:complaint_id>/response-template', complaint_response_template,
         name='complaint_response_template'),
    path('api/complaints/<str:complaint_id>/status', complaint_update_status, name='complaint_update_status'),
    path('api/complaints/<str:complaint_id>/assign', complaint_assign, name='complaint_assign'),
    path('api/complaints/<str:complaint_id>/escalate', complaint_escalate, name='complaint_escalate'),
    path('api/complaints/<str:complaint_id>/resolve', complaint_resolve, name='complaint_resolve'),
    path('api/complaints/<str:complaint_id>/feedback', complaint_feedback, name='complaint_feedback'),
]
