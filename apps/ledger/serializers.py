from rest_framework import serializers

from .models import PointsLedgerEntry


class LedgerEntrySerializer(serializers.ModelSerializer):
    source_type_display = serializers.CharField(source='get_source_type_display', read_only=True)
    created_by_name = serializers.ReadOnlyField(source='created_by.username')

    class Meta:
        model = PointsLedgerEntry
        fields = [
            'id', 'source_type', 'source_type_display', 'source_id',
            'points', 'description', 'created_by_name', 'created_at'
        ]
        read_only_fields = fields
