from django.shortcuts import get_object_or_404
from rest_framework import generics, status, views
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from apps.core.api.views import AgencyContextMixin, HasAgency
from apps.ledger.serializers import LedgerEntrySerializer
from apps.ledger.services import LedgerService
from apps.ledger.unit_of_work import UnitOfWork

from .models import Agency
from .serializers import (
    ActivationSerializer,
    AdjustmentSerializer,
    AgencyRegistrationSerializer,
    AgencySerializer,
    PointsSummarySerializer,
)
from .services import AgencyService


class AgencyRegisterView(views.APIView):
    """
    Self-registration of an agency whose CNPJ already has imported points.
    POST /api/v1/agencies/register/
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = AgencyRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        agency = AgencyService.register(**serializer.validated_data)
        return Response(AgencySerializer(agency).data, status=status.HTTP_201_CREATED)


class MyPointsView(AgencyContextMixin, views.APIView):
    """
    Current balance of the requesting agency.
    GET /api/v1/me/points/
    """
    permission_classes = [IsAuthenticated, HasAgency]

    def get(self, request, *args, **kwargs):
        agency = self.get_agency()
        summary = PointsSummarySerializer(LedgerService.get_summary(agency.pk)).data
        return Response({
            "agency": AgencySerializer(agency).data,
            **summary,
        })


class AgencyLedgerView(generics.ListAPIView):
    """
    Back-office: ledger entries of one agency, newest first.
    GET /api/v1/admin/agencies/<id>/ledger/
    """
    permission_classes = [IsAdminUser]
    serializer_class = LedgerEntrySerializer

    def get_queryset(self):
        agency = get_object_or_404(Agency, pk=self.kwargs['agency_id'])
        return LedgerService.entries_for(agency.pk).select_related('created_by')

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        response.data['balance'] = LedgerService.get_balance(self.kwargs['agency_id'])
        return response


class AgencyActivationView(views.APIView):
    """
    POST /api/v1/admin/agencies/<id>/activation/  {"active": true}
    """
    permission_classes = [IsAdminUser]

    def post(self, request, agency_id, *args, **kwargs):
        agency = get_object_or_404(Agency, pk=agency_id)
        serializer = ActivationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        AgencyService.set_active(agency, serializer.validated_data['active'])
        return Response(AgencySerializer(agency).data)


class AgencyAdjustmentView(views.APIView):
    """
    Manual signed ledger entry.
    POST /api/v1/admin/agencies/<id>/adjustments/  {"points": -100, "description": "..."}
    """
    permission_classes = [IsAdminUser]

    def post(self, request, agency_id, *args, **kwargs):
        agency = get_object_or_404(Agency, pk=agency_id)
        serializer = AdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with UnitOfWork() as uow:
            uow.lock_agency(agency.pk)
            entry = LedgerService.adjust(
                uow, agency.pk,
                serializer.validated_data['points'],
                serializer.validated_data['description'],
                user=request.user,
            )

        return Response({
            "entry": LedgerEntrySerializer(entry).data,
            "balance": LedgerService.get_balance(agency.pk),
        }, status=status.HTTP_201_CREATED)
