"""
Ledger App - Append-only points ledger per agency
"""
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from apps.agencies.models import Agency


class SourceType(models.TextChoices):
    IMPORT = 'IMPORT', 'Importação'
    ORDER = 'ORDER', 'Resgate (Pedido)'
    ADJUSTMENT = 'ADJUSTMENT', 'Ajuste Manual'


class PointsLedgerEntry(models.Model):
    """
    Immutable record of any points change.
    points > 0: crédito, points < 0: débito.
    """
    agency = models.ForeignKey(Agency, on_delete=models.PROTECT, related_name='ledger_entries')
    source_type = models.CharField(max_length=20, choices=SourceType.choices)
    source_id = models.CharField(max_length=64, blank=True, default='')
    points = models.IntegerField()
    description = models.CharField(max_length=255, blank=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = "Lançamento de Pontos"
        verbose_name_plural = "Extrato de Pontos"
        indexes = [
            models.Index(fields=['agency', 'created_at'], name='ledger_agency_created_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['source_type', 'source_id'],
                condition=Q(source_type__in=['IMPORT', 'ORDER']),
                name='unique_ledger_source',
            ),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Lançamentos do extrato são imutáveis.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Lançamentos do extrato não podem ser excluídos.")

    def __str__(self):
        sign = '+' if self.points >= 0 else ''
        return f"{self.get_source_type_display()} {sign}{self.points} ({self.agency_id})"
