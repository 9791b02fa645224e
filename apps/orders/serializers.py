from rest_framework import serializers

from .models import Order, OrderItem


class CartLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    variant_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    expected_points = serializers.IntegerField(required=False, allow_null=True, default=None, min_value=0)


class CartSerializer(serializers.Serializer):
    items = CartLineSerializer(many=True, allow_empty=False)


class OrderItemSerializer(serializers.ModelSerializer):
    product_name = serializers.ReadOnlyField(source='product.name')
    batch = serializers.ReadOnlyField(source='product_price.batch')

    class Meta:
        model = OrderItem
        fields = [
            'id', 'product', 'product_name', 'product_price', 'batch',
            'variant', 'quantity', 'points_per_unit', 'subtotal'
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Order
        fields = ['id', 'status', 'status_display', 'total_points', 'created_at', 'items']
        read_only_fields = fields
