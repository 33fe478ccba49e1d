"""
Django admin registrations for complaints.

Lets staff inspect complaints and their timelines at ``/admin/`` and make
manual corrections during development.
"""

from django.contrib import admin

from .models import Complaint, ComplaintTimelineEntry


class ComplaintTimelineInline(admin.TabularInline):
    model = ComplaintTimelineEntry
    extra = 0
    readonly_fields = ('action', 'description', 'performed_by', 'notes', 'timestamp')


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ('complaint_id', 'title', 'category', 'urgency', 'status', 'assigned_department', 'created_at')
    list_filter = ('status', 'urgency', 'category', 'channel', 'sla_breached')
    search_fields = ('complaint_id', 'title', 'patient_name', 'patient_phone')
    readonly_fields = ('complaint_id', 'ai_analysis', 'created_at', 'updated_at')
    inlines = [ComplaintTimelineInline]


@admin.register(ComplaintTimelineEntry)
class ComplaintTimelineEntryAdmin(admin.ModelAdmin):
    list_display = ('complaint', 'action', 'timestamp')
    list_filter = ('action',)
    search_fields = ('complaint__complaint_id', 'description')
