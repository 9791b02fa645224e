import logging

from django.db.models import Max, Sum
from django.db.models.functions import Coalesce

from .models import PointsLedgerEntry, SourceType

logger = logging.getLogger(__name__)


def _as_points(value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Pontos devem ser um número inteiro (recebido: {value!r}).")
    return value


class LedgerService:
    """
    Único ponto de escrita/leitura do extrato de pontos.
    Escritas exigem uma UnitOfWork ativa; o saldo é sempre SUM(points).
    """

    @staticmethod
    def _append(uow, agency_id, source_type, source_id, points, description='', user=None):
        uow.ensure_active()
        if source_type not in SourceType.values:
            raise ValueError(f"Tipo de origem inválido: {source_type}")

        entry = PointsLedgerEntry.objects.using(uow.using).create(
            agency_id=agency_id,
            source_type=source_type,
            source_id='' if source_id is None else str(source_id),
            points=points,
            description=(description or '')[:255],
            created_by=user,
        )
        logger.info(f"Ledger {source_type} {points:+d} agência={agency_id} origem={entry.source_id or '-'}")
        return entry

    @classmethod
    def credit(cls, uow, agency_id, source_type, source_id, points, description=''):
        points = _as_points(points)
        if points <= 0:
            raise ValueError("Crédito deve ter pontos positivos.")
        return cls._append(uow, agency_id, source_type, source_id, points, description)

    @classmethod
    def debit(cls, uow, agency_id, source_type, source_id, points, description=''):
        points = _as_points(points)
        if points == 0:
            raise ValueError("Débito deve ter pontos diferentes de zero.")
        return cls._append(uow, agency_id, source_type, source_id, -abs(points), description)

    @classmethod
    def adjust(cls, uow, agency_id, points, description, user=None):
        """Ajuste manual (positivo ou negativo) feito pelo back-office."""
        points = _as_points(points)
        if points == 0:
            raise ValueError("Ajuste deve ter pontos diferentes de zero.")
        if not description:
            raise ValueError("Ajuste manual exige uma descrição.")
        return cls._append(uow, agency_id, SourceType.ADJUSTMENT, None, points, description, user=user)

    @staticmethod
    def get_balance(agency_id):
        result = PointsLedgerEntry.objects.filter(agency_id=agency_id).aggregate(
            balance=Coalesce(Sum('points'), 0)
        )
        return result['balance']

    @staticmethod
    def get_summary(agency_id):
        """Saldo e data do último lançamento em uma única consulta."""
        result = PointsLedgerEntry.objects.filter(agency_id=agency_id).aggregate(
            current_points=Coalesce(Sum('points'), 0),
            last_updated_at=Max('created_at'),
        )
        return result

    @staticmethod
    def entries_for(agency_id):
        return PointsLedgerEntry.objects.filter(agency_id=agency_id).order_by('-created_at', '-id')
