"""
Agencies App - B2B customers that earn and redeem points
"""
import re

from django.conf import settings
from django.db import models


def normalize_cnpj(value) -> str:
    """Remove formatação de CPF/CNPJ, mantendo apenas dígitos."""
    return re.sub(r'[^0-9]', '', str(value or ''))


def is_valid_document(value) -> bool:
    """CPF tem 11 dígitos, CNPJ tem 14 dígitos."""
    return len(normalize_cnpj(value)) in (11, 14)


def format_cnpj(value) -> str:
    """
    Formata para exibição: XX.XXX.XXX/XXXX-XX (CNPJ) ou XXX.XXX.XXX-XX (CPF).
    Valores com outro tamanho são devolvidos apenas com dígitos.
    """
    digits = normalize_cnpj(value)
    if len(digits) == 14:
        return f'{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}'
    if len(digits) == 11:
        return f'{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}'
    return digits


class Agency(models.Model):
    """
    Agência (cliente B2B) que acumula pontos a partir das vendas importadas.

    O saldo nunca é armazenado aqui: é sempre a soma do extrato
    (PointsLedgerEntry). Use LedgerService.get_balance().
    """
    cnpj = models.CharField(max_length=14, unique=True, verbose_name="CPF/CNPJ", help_text="Apenas dígitos")
    name = models.CharField(max_length=255, verbose_name="Nome")
    email = models.EmailField(verbose_name="E-mail")
    phone = models.CharField(max_length=20, blank=True, verbose_name="Telefone")
    branch = models.CharField(max_length=100, blank=True, verbose_name="Filial")
    executive_name = models.CharField(max_length=150, blank=True, verbose_name="Executivo")
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='agency',
        verbose_name="Usuário de acesso"
    )
    active = models.BooleanField(default=False, verbose_name="Ativa")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Agência"
        verbose_name_plural = "Agências"
        ordering = ['name']

    def save(self, *args, **kwargs):
        self.cnpj = normalize_cnpj(self.cnpj)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} ({self.formatted_cnpj})"

    @property
    def formatted_cnpj(self):
        return format_cnpj(self.cnpj)

    @property
    def balance(self):
        """Saldo atual derivado do extrato (sempre recalculado)."""
        from apps.ledger.services import LedgerService
        return LedgerService.get_balance(self.pk)
