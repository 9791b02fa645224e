"""
Orders App - Point redemptions
"""
from django.db import models

from apps.agencies.models import Agency
from apps.catalog.models import Product, ProductPrice, ProductVariant


class OrderStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pendente'
    CONFIRMED = 'CONFIRMED', 'Confirmado'
    CANCELED = 'CANCELED', 'Cancelado'


class Order(models.Model):
    agency = models.ForeignKey(Agency, on_delete=models.PROTECT, related_name='orders')
    total_points = models.PositiveIntegerField(default=0, verbose_name="Total em pontos")
    status = models.CharField(max_length=10, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Pedido"
        verbose_name_plural = "Pedidos"
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['agency', 'status'], name='orders_agency_status_idx'),
        ]

    def __str__(self):
        return f"Pedido #{self.pk} - {self.agency.name} ({self.get_status_display()})"


class OrderItem(models.Model):
    """Uma linha por lote utilizado: o mesmo produto pode aparecer em várias linhas."""
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='order_items')
    product_price = models.ForeignKey(ProductPrice, on_delete=models.PROTECT, related_name='order_items')
    variant = models.ForeignKey(ProductVariant, on_delete=models.PROTECT, null=True, blank=True, related_name='order_items')
    quantity = models.PositiveIntegerField()
    points_per_unit = models.PositiveIntegerField()

    class Meta:
        verbose_name = "Item do Pedido"
        verbose_name_plural = "Itens do Pedido"
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity}x {self.product.name} (lote {self.product_price.batch})"

    @property
    def subtotal(self):
        return self.quantity * self.points_per_unit
