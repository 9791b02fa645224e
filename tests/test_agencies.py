import pytest
from django.contrib.auth import authenticate

from apps.agencies.models import Agency, format_cnpj, is_valid_document, normalize_cnpj
from apps.agencies.services import AgencyService
from apps.core.exceptions import AgencyActivationError, RegistrationError
from apps.ledger.models import PointsLedgerEntry, SourceType
from apps.ledger.services import LedgerService
from apps.ledger.unit_of_work import UnitOfWork
from tests.factories import AgencyFactory, PointsImportItemFactory


class TestDocuments:
    def test_normalize(self):
        assert normalize_cnpj('11.222.333/0001-81') == '11222333000181'
        assert normalize_cnpj(None) == ''

    def test_valid_lengths(self):
        assert is_valid_document('11.222.333/0001-81')
        assert is_valid_document('123.456.789-01')
        assert not is_valid_document('1234')

    def test_format(self):
        assert format_cnpj('11222333000181') == '11.222.333/0001-81'
        assert format_cnpj('12345678901') == '123.456.789-01'


@pytest.mark.django_db
class TestAgencyRegistration:
    def test_register_from_imported_points(self):
        PointsImportItemFactory(cnpj='11222333000181', points=300, branch='Campinas', executive_name='Ana')
        PointsImportItemFactory(cnpj='11222333000181', points=200, branch='Campinas', executive_name='Ana')
        PointsImportItemFactory(cnpj='11222333000181', points=0, branch='Santos', executive_name='Bruno')

        agency = AgencyService.register('11.222.333/0001-81', 'Agência Sol', 'sol@example.com', 'segredo123')

        assert agency.cnpj == '11222333000181'
        assert agency.active is True
        assert agency.branch == 'Campinas'
        assert agency.executive_name == 'Ana'
        assert agency.user.check_password('segredo123')
        assert LedgerService.get_balance(agency.pk) == 500
        assert PointsLedgerEntry.objects.filter(agency=agency, source_type=SourceType.IMPORT).count() == 2

    def test_register_requires_imported_points(self):
        with pytest.raises(RegistrationError):
            AgencyService.register('11222333000181', 'Agência Sol', 'sol@example.com', 'segredo123')

        assert not Agency.objects.exists()

    def test_register_invalid_document(self):
        with pytest.raises(RegistrationError):
            AgencyService.register('123', 'Agência Sol', 'sol@example.com', 'segredo123')

    def test_register_twice(self):
        PointsImportItemFactory(cnpj='11222333000181')
        AgencyService.register('11222333000181', 'Agência Sol', 'sol@example.com', 'segredo123')

        with pytest.raises(RegistrationError):
            AgencyService.register('11222333000181', 'Agência Sol', 'sol@example.com', 'segredo123')

    def test_login_with_cnpj(self):
        PointsImportItemFactory(cnpj='11222333000181')
        agency = AgencyService.register('11222333000181', 'Agência Sol', 'sol@example.com', 'segredo123')

        assert authenticate(username='11.222.333/0001-81', password='segredo123') == agency.user
        assert authenticate(username='sol@example.com', password='segredo123') == agency.user
        assert authenticate(username='11222333000181', password='errada') is None


@pytest.mark.django_db
class TestAgencyActivation:
    def test_activation_refused_without_points(self):
        agency = AgencyFactory(active=False)

        with pytest.raises(AgencyActivationError):
            AgencyService.set_active(agency, True)

        agency.refresh_from_db()
        assert agency.active is False

    def test_activation_refused_with_negative_balance(self, credit_points):
        agency = AgencyFactory(active=False)
        with UnitOfWork() as uow:
            LedgerService.adjust(uow, agency.pk, -10, "Estorno")

        with pytest.raises(AgencyActivationError):
            AgencyService.set_active(agency, True)

    def test_activation_with_points(self, credit_points):
        agency = AgencyFactory(active=False)
        credit_points(agency, 10)

        AgencyService.set_active(agency, True)

        agency.refresh_from_db()
        assert agency.active is True

    def test_deactivation_always_allowed(self):
        agency = AgencyFactory(active=True)

        AgencyService.set_active(agency, False)

        agency.refresh_from_db()
        assert agency.active is False

    def test_update_routes_activation_through_gate(self):
        agency = AgencyFactory(active=False)

        with pytest.raises(AgencyActivationError):
            AgencyService.update(agency, name="Novo Nome", active=True)

        agency.refresh_from_db()
        assert agency.name == "Novo Nome"
        assert agency.active is False

    def test_update_rejects_unknown_fields(self):
        agency = AgencyFactory()

        with pytest.raises(ValueError):
            AgencyService.update(agency, cnpj='00000000000000')
