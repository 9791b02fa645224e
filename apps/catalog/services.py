"""
Catalog services - eligibility filtering and home banners
"""
import logging

from django.db import transaction

from apps.core.exceptions import BannerNotFound, ProductNotAvailable

from .allocation import Lot, allocate, validate_quantity
from .models import BannerType, HeroBanner, LinkType, Product, ProductPrice

logger = logging.getLogger(__name__)


def _purchase_history(agency, product):
    from apps.orders.services import OrderService
    return OrderService.purchase_history(agency, product)


class EligibilityService:
    """
    Decide, por requisição, quais produtos cada agência ainda pode resgatar.
    Nada aqui é persistido: o resultado depende do histórico de compras no momento.
    """

    @staticmethod
    def lots_for(product):
        prices = ProductPrice.objects.filter(product=product, active=True).order_by('batch', 'id')
        return [Lot.from_price(price) for price in prices]

    @classmethod
    def preview(cls, product, quantity, agency=None):
        validate_quantity(quantity)
        lots = cls.lots_for(product)
        if not lots:
            raise ProductNotAvailable(
                f"Produto '{product.name}' não possui lotes de preço cadastrados.",
                details={'product_id': product.pk},
            )

        purchase_count, purchases_by_lot = _purchase_history(agency, product)
        return allocate(quantity, lots, purchase_count, purchases_by_lot)

    @classmethod
    def is_eligible(cls, product, agency=None):
        try:
            return cls.preview(product, 1, agency).can_add
        except ProductNotAvailable:
            return False

    @classmethod
    def eligible_allocations(cls, agency=None, queryset=None):
        """Pares (produto, alocação de 1 unidade) para os produtos que a agência ainda pode adicionar."""
        if queryset is None:
            queryset = Product.objects.filter(active=True)
        queryset = queryset.select_related('category')

        results = []
        for product in queryset:
            try:
                allocation = cls.preview(product, 1, agency)
            except ProductNotAvailable:
                continue
            if allocation.can_add:
                results.append((product, allocation))
        return results

    @classmethod
    def eligible_products(cls, agency=None, queryset=None):
        """Produtos ativos que a agência ainda pode adicionar (quantidade 1)."""
        return [product for product, _ in cls.eligible_allocations(agency, queryset)]


class HeroBannerService:

    @staticmethod
    def _link_for(banner):
        link_type = banner.link_type or LinkType.NONE
        if link_type == LinkType.EXTERNAL_URL and banner.external_url:
            return {'type': 'EXTERNAL', 'url': banner.external_url}
        if link_type == LinkType.PRODUCTS_PAGE:
            return {'type': 'PRODUCTS_PAGE'}
        return None

    @classmethod
    def active_for_display(cls, agency=None):
        """
        Payload da home, na ordem de exibição.
        Banners de produto só aparecem se a agência ainda pode resgatar o produto.
        """
        banners = HeroBanner.objects.filter(active=True).select_related('product').order_by('display_order', 'created_at')

        result = []
        for banner in banners:
            if banner.banner_type == BannerType.EXTERNAL:
                if not banner.image_desktop:
                    continue
                result.append({
                    'id': banner.pk,
                    'nome': 'Banner',
                    'descricao': '',
                    'imagem': banner.image_desktop,
                    'imagem_mobile': banner.image_mobile or banner.image_desktop,
                    'preco': 0,
                    'displayDuration': banner.display_duration or 5,
                    'link': cls._link_for(banner),
                })
                continue

            product = banner.product
            if product is None or not product.active:
                continue

            try:
                allocation = EligibilityService.preview(product, 1, agency)
            except ProductNotAvailable:
                continue
            if not allocation.can_add:
                continue

            result.append({
                'id': product.pk,
                'nome': product.name,
                'descricao': product.description or '',
                'imagem': banner.image_desktop,
                'imagem_mobile': banner.image_mobile or banner.image_desktop,
                'preco': allocation.first_lot.value,
                'displayDuration': banner.display_duration or 5,
                'link': {'type': 'PRODUCT', 'product_id': product.pk},
            })
        return result

    @staticmethod
    @transaction.atomic
    def reorder(updates):
        """
        updates: [{'id': banner_id, 'display_order': n}, ...]
        """
        banner_ids = [item['id'] for item in updates]
        banners = {b.pk: b for b in HeroBanner.objects.select_for_update().filter(pk__in=banner_ids)}

        missing = set(banner_ids) - set(banners)
        if missing:
            raise BannerNotFound(f"Banners não encontrados: {sorted(missing)}", details={'ids': sorted(missing)})

        for item in updates:
            banners[item['id']].display_order = int(item['display_order'])
        HeroBanner.objects.bulk_update(banners.values(), ['display_order'])
        logger.info(f"Ordem de {len(banners)} banners atualizada")
        return list(banners.values())
