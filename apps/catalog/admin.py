"""
Catalog App - Admin Configuration
"""
from django.contrib import admin

from .models import Category, HeroBanner, Product, ProductPrice, ProductVariant


class ProductPriceInline(admin.TabularInline):
    model = ProductPrice
    extra = 1
    fields = ['batch', 'value', 'purchase_cap', 'active']
    ordering = ['batch', 'id']


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ['model', 'size', 'stock', 'active']


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name']
    search_fields = ['name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'quantity', 'lots_count', 'active', 'updated_at']
    list_filter = ['active', 'category']
    search_fields = ['name', 'description']
    inlines = [ProductPriceInline, ProductVariantInline]

    def lots_count(self, obj):
        return obj.prices.filter(active=True).count()
    lots_count.short_description = 'Lotes ativos'


@admin.register(HeroBanner)
class HeroBannerAdmin(admin.ModelAdmin):
    list_display = ['display_order', '__str__', 'banner_type', 'link_type', 'display_duration', 'active']
    list_display_links = ['__str__']
    list_editable = ['display_order', 'active']
    list_filter = ['banner_type', 'active']
    raw_id_fields = ['product']
