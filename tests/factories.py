import factory
from django.contrib.auth import get_user_model

from apps.agencies.models import Agency
from apps.catalog.models import BannerType, Category, HeroBanner, Product, ProductPrice, ProductVariant
from apps.imports.models import PointsImport, PointsImportItem

User = get_user_model()

class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f'user_{n}')
    email = factory.LazyAttribute(lambda o: f'{o.username}@example.com')

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        password = extracted or "password123"
        self.set_password(password)
        if create:
            self.save()

class AgencyFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Agency

    cnpj = factory.Sequence(lambda n: f'{n:014d}')
    name = factory.Faker('company')
    email = factory.Sequence(lambda n: f'agencia{n}@example.com')
    user = factory.SubFactory(UserFactory)
    active = True

class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f'Category {n}')

class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f'Produto {n}')
    category = factory.SubFactory(CategoryFactory)
    quantity = 100
    active = True

class ProductVariantFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductVariant

    product = factory.SubFactory(ProductFactory)
    model = 'Polo'
    size = 'M'
    stock = 10

class ProductPriceFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductPrice

    product = factory.SubFactory(ProductFactory)
    value = 100
    batch = 1
    purchase_cap = 0

class HeroBannerFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = HeroBanner

    banner_type = BannerType.PRODUCT
    product = factory.SubFactory(ProductFactory)
    image_desktop = 'banners/desktop.jpg'

class PointsImportFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PointsImport

    reference_period = '2024-05'
    checksum = factory.Sequence(lambda n: f'checksum-{n}')

class PointsImportItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PointsImportItem

    points_import = factory.SubFactory(PointsImportFactory)
    row_number = factory.Sequence(lambda n: n + 1)
    sale_id = factory.Sequence(lambda n: f'V{n:06d}')
    cnpj = '11222333000181'
    agency_name = 'Agência Teste'
    branch = 'São Paulo'
    executive_name = 'Maria'
    company = 'ACME'
    points = 100
