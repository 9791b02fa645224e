from rest_framework import serializers

from .models import PointsImport


class PointsImportCreateSerializer(serializers.Serializer):
    reference_period = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    checksum = serializers.CharField(max_length=64, required=False, allow_blank=True, default='')
    rows = serializers.ListField(child=serializers.DictField(), allow_empty=False)


class PointsImportSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    uploaded_by_name = serializers.ReadOnlyField(source='uploaded_by.username')

    class Meta:
        model = PointsImport
        fields = [
            'id', 'reference_period', 'checksum', 'status', 'status_display',
            'total_rows', 'processed_rows', 'inserted_rows', 'skipped_rows',
            'progress_percent', 'uploaded_by_name', 'uploaded_at',
            'started_at', 'finished_at', 'log', 'error_message'
        ]
        read_only_fields = fields
