"""
Orders services - cart preview and checkout
"""
import logging
from collections import defaultdict

from django.db.models import Sum

from apps.catalog.allocation import allocate, validate_quantity
from apps.catalog.models import Product, ProductVariant
from apps.catalog.services import EligibilityService
from apps.core.exceptions import (
    AgencyInactive,
    ConcurrentModification,
    InsufficientBalance,
    InvalidQuantity,
    PointsError,
    ProductNotAvailable,
)
from apps.ledger.models import SourceType
from apps.ledger.services import LedgerService
from apps.ledger.unit_of_work import UnitOfWork

from .models import Order, OrderItem, OrderStatus

logger = logging.getLogger(__name__)


def _as_int(value, field):
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidQuantity(details={field: value})
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidQuantity(f"Valor inválido para '{field}'.", details={field: value})


def merge_lines(lines):
    """
    Agrupa as linhas do carrinho por (produto, variação), somando quantidades.
    expected_points só é mantido quando todas as linhas agrupadas o informam.
    O resultado sai ordenado por (produto, variação): é a ordem em que a checkout trava as linhas.
    """
    merged = {}
    for line in lines:
        product_id = _as_int(line.get('product_id'), 'product_id')
        variant_id = _as_int(line.get('variant_id'), 'variant_id')
        quantity = validate_quantity(line.get('quantity'))
        expected = _as_int(line.get('expected_points'), 'expected_points')

        key = (product_id, variant_id)
        if key not in merged:
            merged[key] = {
                'product_id': product_id,
                'variant_id': variant_id,
                'quantity': 0,
                'expected_points': 0,
            }
        entry = merged[key]
        entry['quantity'] += quantity
        if expected is None or entry['expected_points'] is None:
            entry['expected_points'] = None
        else:
            entry['expected_points'] += expected
    return sorted(merged.values(), key=lambda entry: (entry['product_id'], entry['variant_id'] or 0))


class CartAllocator:
    """
    Distribui as linhas de um carrinho pelos lotes, na ordem de merge_lines.
    Unidades de linhas anteriores do mesmo produto contam como histórico das seguintes.
    Usado pela pré-visualização e pela checkout.
    """

    def __init__(self, agency):
        self.agency = agency
        self.reserved_count = defaultdict(int)
        self.reserved_by_lot = defaultdict(lambda: defaultdict(int))

    def allocate(self, product, quantity):
        lots = EligibilityService.lots_for(product)
        if not lots:
            raise ProductNotAvailable(
                f"Produto '{product.name}' não possui lotes de preço cadastrados.",
                details={'product_id': product.pk},
            )

        purchase_count, purchases_by_lot = OrderService.purchase_history(self.agency, product)
        purchases_by_lot = dict(purchases_by_lot)
        for price_id, units in self.reserved_by_lot[product.pk].items():
            purchases_by_lot[price_id] = purchases_by_lot.get(price_id, 0) + units
        purchase_count += self.reserved_count[product.pk]

        result = allocate(quantity, lots, purchase_count, purchases_by_lot)
        if result.can_add:
            for lot in result.distribution:
                self.reserved_by_lot[product.pk][lot.price_id] += lot.quantity
            self.reserved_count[product.pk] += quantity
        return result


class OrderService:

    @staticmethod
    def purchase_history(agency, product):
        """
        Unidades já resgatadas pela agência (pedidos CONFIRMED).
        Returns: (agency_purchase_count, {product_price_id: units})
        """
        if agency is None:
            return 0, {}

        rows = (
            OrderItem.objects
            .filter(order__agency=agency, order__status=OrderStatus.CONFIRMED, product=product)
            .values('product_price_id')
            .annotate(units=Sum('quantity'))
        )
        purchases_by_lot = {row['product_price_id']: row['units'] for row in rows}
        return sum(purchases_by_lot.values()), purchases_by_lot

    @classmethod
    def checkout(cls, agency, lines):
        """
        Efetiva o resgate em uma única transação:
        re-valida a distribuição por lotes, confere o saldo, grava pedido e itens,
        debita o extrato e baixa o estoque. Qualquer falha desfaz tudo.
        """
        merged = merge_lines(lines)
        if not merged:
            raise InvalidQuantity("O carrinho está vazio.")

        with UnitOfWork() as uow:
            agency = uow.lock_agency(agency.pk)
            if not agency.active:
                raise AgencyInactive(details={'agency_id': agency.pk})

            allocator = CartAllocator(agency)
            planned = []
            total_points = 0
            # merge_lines já ordena por (produto, variação): travas sempre na mesma ordem
            for line in merged:
                product, variant = cls._lock_stock(line)

                result = allocator.allocate(product, line['quantity'])
                if not result.can_add:
                    raise ConcurrentModification(
                        f"Produto '{product.name}' não está mais disponível na quantidade solicitada. "
                        f"Apenas {result.allocated_units} de {line['quantity']} unidades podem ser resgatadas.",
                        details={'product_id': product.pk, 'allocated_units': result.allocated_units},
                    )
                if line['expected_points'] is not None and line['expected_points'] != result.total_price:
                    raise ConcurrentModification(
                        f"O valor de '{product.name}' mudou: {result.total_price} pontos.",
                        details={
                            'product_id': product.pk,
                            'expected_points': line['expected_points'],
                            'total_points': result.total_price,
                        },
                    )

                planned.append((product, variant, line['quantity'], result))
                total_points += result.total_price

            balance = LedgerService.get_balance(agency.pk)
            if balance < total_points:
                raise InsufficientBalance(
                    f"Saldo insuficiente: {balance} pontos disponíveis, {total_points} necessários.",
                    details={'balance': balance, 'required': total_points},
                )

            order = Order.objects.create(agency=agency, total_points=total_points, status=OrderStatus.PENDING)
            for product, variant, quantity, result in planned:
                OrderItem.objects.bulk_create([
                    OrderItem(
                        order=order,
                        product=product,
                        product_price_id=lot.price_id,
                        variant=variant,
                        quantity=lot.quantity,
                        points_per_unit=lot.value,
                    )
                    for lot in result.distribution
                ])
                if variant is not None:
                    variant.stock -= quantity
                    variant.save(update_fields=['stock', 'updated_at'])
                else:
                    product.quantity -= quantity
                    product.save(update_fields=['quantity', 'updated_at'])

            if total_points:
                LedgerService.debit(
                    uow, agency.pk, SourceType.ORDER, order.pk, total_points,
                    description=f"Resgate - Pedido #{order.pk}",
                )

            order.status = OrderStatus.CONFIRMED
            order.save(update_fields=['status', 'updated_at'])

        logger.info(f"Pedido #{order.pk} confirmado: agência={agency.pk} total={total_points} pts")
        return order

    @staticmethod
    def _lock_stock(line):
        try:
            product = Product.objects.select_for_update().get(pk=line['product_id'])
        except Product.DoesNotExist:
            raise ProductNotAvailable("Produto não encontrado.", details={'product_id': line['product_id']})

        if not product.active:
            raise ProductNotAvailable(f"Produto '{product.name}' está inativo.", details={'product_id': product.pk})

        variant = None
        if line['variant_id'] is not None:
            try:
                variant = ProductVariant.objects.select_for_update().get(
                    pk=line['variant_id'], product=product, active=True
                )
            except ProductVariant.DoesNotExist:
                raise ProductNotAvailable(
                    f"Variação não encontrada para '{product.name}'.",
                    details={'product_id': product.pk, 'variant_id': line['variant_id']},
                )
            available = variant.stock
        else:
            available = product.quantity

        if available < line['quantity']:
            raise ProductNotAvailable(
                f"Estoque insuficiente para '{product.name}'. Disponível: {available}, solicitado: {line['quantity']}.",
                details={'product_id': product.pk, 'available': available, 'requested': line['quantity']},
            )
        return product, variant

    @staticmethod
    def orders_for(agency):
        return (
            Order.objects.filter(agency=agency)
            .prefetch_related('items__product', 'items__product_price', 'items__variant')
            .order_by('-created_at', '-id')
        )

    @staticmethod
    def cancel(order):
        """Somente pedidos pendentes podem ser cancelados; pedidos confirmados já debitaram o extrato."""
        if order.status != OrderStatus.PENDING:
            raise PointsError(
                f"Apenas pedidos pendentes podem ser cancelados (status atual: {order.get_status_display()}).",
                details={'order_id': order.pk, 'status': order.status},
            )
        order.status = OrderStatus.CANCELED
        order.save(update_fields=['status', 'updated_at'])
        logger.info(f"Pedido #{order.pk} cancelado")
        return order


class CartService:
    """Pré-visualização do carrinho (leitura apenas; a checkout re-valida tudo)."""

    @staticmethod
    def preview(agency, lines):
        items = []
        cart_total = 0
        can_checkout = True
        allocator = CartAllocator(agency)

        for line in merge_lines(lines):
            product = Product.objects.filter(pk=line['product_id'], active=True).first()
            if product is None:
                raise ProductNotAvailable("Produto não encontrado.", details={'product_id': line['product_id']})

            result = allocator.allocate(product, line['quantity'])
            items.append({
                'product_id': product.pk,
                'variant_id': line['variant_id'],
                'name': product.name,
                'quantity': line['quantity'],
                'can_add': result.can_add,
                'allocated_units': result.allocated_units,
                'total_price': result.total_price,
                'average_unit_price': result.average_unit_price,
                'distribution': [lot.as_dict() for lot in result.distribution],
            })
            cart_total += result.total_price
            can_checkout = can_checkout and result.can_add

        return {
            'items': items,
            'total_points': cart_total,
            'can_checkout': can_checkout and bool(items),
        }
