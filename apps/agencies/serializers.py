from rest_framework import serializers

from .models import Agency


class AgencySerializer(serializers.ModelSerializer):
    formatted_cnpj = serializers.ReadOnlyField()

    class Meta:
        model = Agency
        fields = [
            'id', 'cnpj', 'formatted_cnpj', 'name', 'email', 'phone',
            'branch', 'executive_name', 'active', 'created_at'
        ]
        read_only_fields = fields


class AgencyRegistrationSerializer(serializers.Serializer):
    cnpj = serializers.CharField(max_length=18)
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')


class PointsSummarySerializer(serializers.Serializer):
    current_points = serializers.IntegerField()
    last_updated_at = serializers.DateTimeField(allow_null=True)


class ActivationSerializer(serializers.Serializer):
    active = serializers.BooleanField()


class AdjustmentSerializer(serializers.Serializer):
    points = serializers.IntegerField()
    description = serializers.CharField(max_length=255)

    def validate_points(self, value):
        if value == 0:
            raise serializers.ValidationError("Informe um valor diferente de zero.")
        return value
