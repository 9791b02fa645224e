from rest_framework import permissions


def resolve_agency(request):
    """
    Returns the Agency linked to the authenticated user, or None.
    Anonymous requests and staff users without an agency resolve to None.
    """
    cached = getattr(request, '_agency_cache', False)
    if cached is not False:
        return cached

    agency = None
    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        from apps.agencies.models import Agency
        agency = Agency.objects.filter(user=user).first()
    request._agency_cache = agency
    return agency


class AgencyContextMixin:
    """
    Mixin for views acting on behalf of the requesting agency.
    """

    def get_agency(self):
        return resolve_agency(self.request)


class HasAgency(permissions.BasePermission):
    """Allows access to any user linked to an agency, active or not."""
    message = "Usuário não está vinculado a uma agência."

    def has_permission(self, request, view):
        return resolve_agency(request) is not None
