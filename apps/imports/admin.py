"""
Imports App - Admin Configuration
"""
from django.contrib import admin
from django.utils.html import format_html

from .models import PointsImport, PointsImportItem


@admin.register(PointsImport)
class PointsImportAdmin(admin.ModelAdmin):
    list_display = [
        'uploaded_at', 'reference_period', 'status', 'progress_display',
        'inserted_rows', 'skipped_rows', 'uploaded_by'
    ]
    list_filter = ['status', 'uploaded_at']
    search_fields = ['reference_period', 'checksum']
    date_hierarchy = 'uploaded_at'
    exclude = ['raw_rows']
    readonly_fields = [
        'checksum', 'status', 'uploaded_by', 'uploaded_at', 'total_rows', 'processed_rows',
        'inserted_rows', 'skipped_rows', 'started_at', 'finished_at', 'log', 'error_message'
    ]

    def progress_display(self, obj):
        pct = obj.progress_percent
        color = 'green' if pct == 100 else 'orange' if pct > 50 else 'red'
        return format_html(
            '<span style="color: {};">{}/{} ({}%)</span>',
            color, obj.processed_rows, obj.total_rows, pct
        )
    progress_display.short_description = 'Progresso'


@admin.register(PointsImportItem)
class PointsImportItemAdmin(admin.ModelAdmin):
    list_display = ['points_import', 'row_number', 'sale_id', 'cnpj', 'agency_name', 'points', 'company']
    list_filter = ['company', 'branch']
    search_fields = ['sale_id', 'cnpj', 'agency_name', 'executive_name']
    raw_id_fields = ['points_import']
