import pytest
from rest_framework.test import APIClient

from apps.ledger.models import SourceType
from apps.ledger.services import LedgerService
from apps.ledger.unit_of_work import UnitOfWork
from tests.factories import AgencyFactory, UserFactory


@pytest.fixture
def client():
    return APIClient()

@pytest.fixture
def user():
    return UserFactory()

@pytest.fixture
def admin_user():
    return UserFactory(is_staff=True, is_superuser=True)

@pytest.fixture
def agency(user):
    return AgencyFactory(user=user)

@pytest.fixture
def credit_points():
    """Credits `points` to an agency through the ledger, as an import would."""
    counter = {'n': 0}

    def _credit(agency, points):
        counter['n'] += 1
        with UnitOfWork() as uow:
            return LedgerService.credit(
                uow, agency.pk, SourceType.IMPORT, f"test-{agency.pk}-{counter['n']}", points, "Crédito de teste"
            )
    return _credit

@pytest.fixture
def auth_client(client, user, agency):
    client.force_authenticate(user=user)
    return client
