"""
Ledger App - Admin Configuration
Entries are read-only: corrections are made with new ADJUSTMENT entries.
"""
from django.contrib import admin

from .models import PointsLedgerEntry


@admin.register(PointsLedgerEntry)
class PointsLedgerEntryAdmin(admin.ModelAdmin):
    list_display = ['created_at', 'agency', 'source_type', 'source_id', 'points', 'description', 'created_by']
    list_filter = ['source_type', 'created_at']
    search_fields = ['agency__name', 'agency__cnpj', 'source_id', 'description']
    date_hierarchy = 'created_at'
    raw_id_fields = ['agency', 'created_by']
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
