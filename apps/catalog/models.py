"""
Catalog App - Redeemable products and their price lots
"""
from django.core.exceptions import ValidationError
from django.db import models


class Category(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        verbose_name = "Categoria"
        verbose_name_plural = "Categorias"
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(models.Model):
    """
    Produto resgatável com pontos.
    O preço não fica aqui: cada produto tem um ou mais lotes (ProductPrice).
    """
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, blank=True, related_name='products')
    name = models.CharField(max_length=255, verbose_name="Nome do Produto")
    description = models.TextField(blank=True, verbose_name="Descrição")
    quantity = models.PositiveIntegerField(default=0, verbose_name="Estoque")
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Produto"
        verbose_name_plural = "Produtos"
        ordering = ['name']

    def __str__(self):
        return self.name


class ProductVariant(models.Model):
    """Variação (modelo/tamanho) com estoque próprio."""
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='variants')
    model = models.CharField(max_length=100, blank=True, verbose_name="Modelo")
    size = models.CharField(max_length=20, blank=True, verbose_name="Tamanho")
    stock = models.PositiveIntegerField(default=0, verbose_name="Estoque")
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Variação de Produto"
        verbose_name_plural = "Variações de Produtos"
        ordering = ['product', 'model', 'size']

    def __str__(self):
        label = " - ".join(part for part in (self.model, self.size) if part)
        return f"{self.product.name} ({label})" if label else self.product.name


class ProductPrice(models.Model):
    """
    Lote de preço de um produto.

    purchase_cap (quantidade_compra):
        0  -> regra especial: apenas 1 unidade por agência, em qualquer lote, para sempre
        >0 -> até N unidades deste lote por agência
    Lotes são consumidos em ordem crescente de batch; empate pelo id (ordem de cadastro).
    """
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='prices')
    value = models.PositiveIntegerField(verbose_name="Pontos por unidade")
    batch = models.PositiveIntegerField(verbose_name="Lote")
    purchase_cap = models.PositiveIntegerField(default=0, verbose_name="Quantidade por agência")
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Lote de Preço"
        verbose_name_plural = "Lotes de Preço"
        ordering = ['batch', 'id']

    def __str__(self):
        return f"{self.product.name} - Lote {self.batch} ({self.value} pts)"


class BannerType(models.TextChoices):
    PRODUCT = 'PRODUCT', 'Produto'
    EXTERNAL = 'EXTERNAL', 'Externo'


class LinkType(models.TextChoices):
    EXTERNAL_URL = 'EXTERNAL_URL', 'URL Externa'
    PRODUCTS_PAGE = 'PRODUCTS_PAGE', 'Página de Produtos'
    NONE = 'NONE', 'Sem Link'


class HeroBanner(models.Model):
    """Banner da home: destaque de produto ou banner externo."""
    banner_type = models.CharField(max_length=10, choices=BannerType.choices, default=BannerType.PRODUCT)
    product = models.OneToOneField(Product, on_delete=models.CASCADE, null=True, blank=True, related_name='hero_banner')
    external_url = models.URLField(blank=True, null=True)
    link_type = models.CharField(max_length=20, choices=LinkType.choices, blank=True, null=True)
    image_desktop = models.CharField(max_length=255, blank=True)
    image_mobile = models.CharField(max_length=255, blank=True)
    display_order = models.PositiveIntegerField(default=0)
    display_duration = models.PositiveIntegerField(default=5, help_text="Segundos")
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Banner"
        verbose_name_plural = "Banners"
        ordering = ['display_order', 'created_at']

    def clean(self):
        if self.banner_type == BannerType.PRODUCT:
            if not self.product_id:
                raise ValidationError("Produto é obrigatório para banners do tipo PRODUCT.")
            if self.external_url:
                raise ValidationError("URL externa não pode ser definida para banners do tipo PRODUCT.")
        else:
            if self.product_id:
                raise ValidationError("Produto não pode ser definido para banners do tipo EXTERNAL.")
            if not self.image_desktop:
                raise ValidationError("Imagem desktop é obrigatória para banners do tipo EXTERNAL.")
            if (self.link_type or LinkType.NONE) == LinkType.EXTERNAL_URL and not self.external_url:
                raise ValidationError("URL externa é obrigatória quando o link é EXTERNAL_URL.")

    def save(self, *args, **kwargs):
        # Campos que não pertencem ao tipo do banner são sempre limpos
        if self.banner_type == BannerType.PRODUCT:
            self.external_url = None
            self.link_type = None
        else:
            self.product = None
            self.link_type = self.link_type or LinkType.NONE

        if self._state.adding and not self.display_order:
            current_max = HeroBanner.objects.aggregate(models.Max('display_order'))['display_order__max'] or 0
            self.display_order = current_max + 1
        super().save(*args, **kwargs)

    def __str__(self):
        if self.banner_type == BannerType.PRODUCT and self.product_id:
            return f"Banner #{self.display_order} - {self.product.name}"
        return f"Banner #{self.display_order} - Externo"
