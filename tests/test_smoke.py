import pytest
from django.conf import settings

from apps.agencies.models import Agency


@pytest.mark.django_db
def test_smoke_settings():
    """Verify vital settings are configured"""
    assert settings.AUTH_USER_MODEL
    assert 'apps.ledger' in settings.INSTALLED_APPS
    assert settings.REST_FRAMEWORK['EXCEPTION_HANDLER'] == 'apps.core.api.exceptions.points_exception_handler'

@pytest.mark.django_db
def test_db_interaction(agency):
    """Verify Factory Boy and DB access"""
    assert Agency.objects.count() == 1
    assert agency.user is not None
    assert agency.balance == 0

@pytest.mark.django_db
def test_create_user(user):
    """Verify user creation"""
    assert user.check_password("password123")
