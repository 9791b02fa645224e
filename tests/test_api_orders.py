import pytest
from django.urls import reverse
from rest_framework import status

from apps.ledger.services import LedgerService
from apps.orders.models import Order
from tests.factories import AgencyFactory, HeroBannerFactory, ProductFactory, ProductPriceFactory


@pytest.fixture
def product():
    product = ProductFactory(name="Garrafa", quantity=20)
    ProductPriceFactory(product=product, batch=1, value=100, purchase_cap=0)
    ProductPriceFactory(product=product, batch=2, value=150, purchase_cap=3)
    return product


@pytest.mark.django_db
class TestAPICatalog:
    def test_products_priced_per_agency(self, auth_client, product):
        response = auth_client.get(reverse('api-products'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['id'] == product.pk
        assert response.data[0]['price']['value'] == 100

    def test_products_anonymous(self, client, product):
        ProductFactory(name="Sem preço")

        response = client.get(reverse('api-products'))

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == ["Garrafa"]

    def test_hero_banners(self, client, product):
        HeroBannerFactory(product=product)

        response = client.get(reverse('api-hero-banners'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['preco'] == 100

    def test_cart_preview(self, auth_client, product):
        response = auth_client.post(reverse('api-cart-preview'), {
            'items': [{'product_id': product.pk, 'quantity': 3}]
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_points'] == 400
        assert response.data['items'][0]['average_unit_price'].startswith('133.33')


@pytest.mark.django_db
class TestAPIOrders:
    def test_checkout(self, auth_client, agency, credit_points, product):
        credit_points(agency, 1000)

        response = auth_client.post(reverse('api-checkout'), {
            'items': [{'product_id': product.pk, 'quantity': 2, 'expected_points': 250}]
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'CONFIRMED'
        assert response.data['total_points'] == 250
        assert len(response.data['items']) == 2
        assert LedgerService.get_balance(agency.pk) == 750

        history = auth_client.get(reverse('api-orders'))
        assert history.data['count'] == 1

    def test_checkout_insufficient_balance(self, auth_client, agency, credit_points, product):
        credit_points(agency, 50)

        response = auth_client.post(reverse('api-checkout'), {
            'items': [{'product_id': product.pk, 'quantity': 1}]
        }, format='json')

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data['error']['code'] == 'InsufficientBalance'
        assert response.data['error']['details'] == {'balance': 50, 'required': 100}
        assert Order.objects.count() == 0

    def test_checkout_stale_cart(self, auth_client, agency, credit_points, product):
        credit_points(agency, 1000)

        response = auth_client.post(reverse('api-checkout'), {
            'items': [{'product_id': product.pk, 'quantity': 1, 'expected_points': 150}]
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error']['code'] == 'ConcurrentModification'

    def test_checkout_validation(self, auth_client, product):
        response = auth_client.post(reverse('api-checkout'), {
            'items': [{'product_id': product.pk, 'quantity': 0}]
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestAPIAdmin:
    def test_requires_staff(self, auth_client, agency):
        response = auth_client.get(reverse('api-admin-agency-ledger', args=[agency.pk]))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_ledger_and_adjustment(self, client, admin_user, agency, credit_points):
        client.force_authenticate(user=admin_user)
        credit_points(agency, 100)

        response = client.post(reverse('api-admin-agency-adjustments', args=[agency.pk]), {
            'points': -30, 'description': 'Estorno de venda'
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['balance'] == 70

        ledger = client.get(reverse('api-admin-agency-ledger', args=[agency.pk]))
        assert ledger.status_code == status.HTTP_200_OK
        assert ledger.data['balance'] == 70
        assert ledger.data['results'][0]['points'] == -30
        assert ledger.data['results'][0]['created_by_name'] == admin_user.username

    def test_activation_gate(self, client, admin_user):
        client.force_authenticate(user=admin_user)
        agency = AgencyFactory(active=False)

        response = client.post(reverse('api-admin-agency-activation', args=[agency.pk]), {'active': True}, format='json')

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data['error']['code'] == 'AgencyActivationError'

    def test_reorder_unknown_banner(self, client, admin_user):
        client.force_authenticate(user=admin_user)

        response = client.post(reverse('api-admin-banner-reorder'), [{'id': 999, 'display_order': 1}], format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'BannerNotFound'
        assert response.data['error']['details'] == {'ids': [999]}

    def test_create_import(self, client, admin_user):
        client.force_authenticate(user=admin_user)

        response = client.post(reverse('api-admin-imports'), {
            'reference_period': '2024-05',
            'rows': [{'sale_id': 'V1', 'cnpj': '11222333000181', 'points': 10}],
        }, format='json')

        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.data['status'] == 'PENDING'

        duplicate = client.post(reverse('api-admin-imports'), {
            'reference_period': '2024-05',
            'rows': [{'sale_id': 'V1', 'cnpj': '11222333000181', 'points': 10}],
        }, format='json')
        assert duplicate.status_code == status.HTTP_409_CONFLICT
