from rest_framework import serializers

from .models import HeroBanner, Product, ProductPrice, ProductVariant


class ProductVariantSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductVariant
        fields = ['id', 'model', 'size', 'stock']


class ProductPriceSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductPrice
        fields = ['id', 'value', 'batch', 'purchase_cap']


class ProductSerializer(serializers.ModelSerializer):
    """Produto do catálogo com o preço da próxima unidade para a agência."""
    category_name = serializers.ReadOnlyField(source='category.name')
    variants = serializers.SerializerMethodField()
    price = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'category', 'category_name',
            'quantity', 'price', 'variants'
        ]

    def get_variants(self, obj):
        return ProductVariantSerializer(obj.variants.filter(active=True), many=True).data

    def get_price(self, obj):
        # Preenchido pela view com a alocação de 1 unidade
        allocation = self.context.get('allocations', {}).get(obj.pk)
        if allocation is None or allocation.first_lot is None:
            return None
        return allocation.first_lot.as_dict()


class HeroBannerReorderItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    display_order = serializers.IntegerField(min_value=0)


class HeroBannerSerializer(serializers.ModelSerializer):
    class Meta:
        model = HeroBanner
        fields = [
            'id', 'banner_type', 'product', 'external_url', 'link_type',
            'image_desktop', 'image_mobile', 'display_order', 'display_duration', 'active'
        ]
