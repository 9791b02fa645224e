"""
Authentication backend for agency logins
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.db.models import Q

from apps.agencies.models import normalize_cnpj


class AgencyLoginBackend(ModelBackend):
    """
    Authenticates against settings.AUTH_USER_MODEL.
    Allows login using username, email or the agency CPF/CNPJ (formatted or not).
    """
    def authenticate(self, request, username=None, password=None, **kwargs):
        UserModel = get_user_model()
        if username is None:
            username = kwargs.get(UserModel.USERNAME_FIELD)
        if not username or password is None:
            return None

        lookup = Q(username__iexact=username) | Q(email__iexact=username)
        digits = normalize_cnpj(username)
        if len(digits) in (11, 14):
            lookup |= Q(agency__cnpj=digits)

        candidates = UserModel.objects.filter(lookup).distinct().order_by('id')
        for user in candidates:
            if user.check_password(password) and self.user_can_authenticate(user):
                return user
        return None
