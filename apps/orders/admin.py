"""
Orders App - Admin Configuration
"""
from django.contrib import admin, messages

from apps.core.exceptions import PointsError

from .models import Order, OrderItem
from .services import OrderService


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ['product', 'product_price', 'variant', 'quantity', 'points_per_unit']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'agency', 'status', 'total_points', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['agency__name', 'agency__cnpj']
    date_hierarchy = 'created_at'
    readonly_fields = ['agency', 'total_points', 'status', 'created_at', 'updated_at']
    inlines = [OrderItemInline]
    actions = ['cancel_orders']

    def has_add_permission(self, request):
        return False

    @admin.action(description='Cancelar pedidos pendentes selecionados')
    def cancel_orders(self, request, queryset):
        for order in queryset:
            try:
                OrderService.cancel(order)
            except PointsError as e:
                self.message_user(request, f"Pedido #{order.pk}: {e.message}", level=messages.WARNING)
