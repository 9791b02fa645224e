"""
Agency services - self registration and activation gate
"""
import logging
from collections import Counter

from django.contrib.auth import get_user_model

from apps.core.exceptions import AgencyActivationError, RegistrationError
from apps.ledger.services import LedgerService
from apps.ledger.unit_of_work import UnitOfWork

from .models import Agency, format_cnpj, is_valid_document, normalize_cnpj

logger = logging.getLogger(__name__)

User = get_user_model()

UPDATABLE_FIELDS = ('name', 'email', 'phone', 'branch', 'executive_name')


def _most_common(values):
    values = [v for v in values if v]
    if not values:
        return ''
    return Counter(values).most_common(1)[0][0]


class AgencyService:

    normalize_cnpj = staticmethod(normalize_cnpj)
    is_valid_document = staticmethod(is_valid_document)
    format_cnpj = staticmethod(format_cnpj)

    @staticmethod
    def register(cnpj, name, email, password, phone=''):
        """
        Cadastro da agência a partir dos pontos já importados para o CNPJ.

        Filial e executivo vêm dos valores mais frequentes na importação.
        Cria usuário de acesso + agência ativa e credita todos os itens
        importados para o CNPJ, tudo na mesma transação.
        """
        from apps.imports.models import PointsImportItem
        from apps.imports.services import PointsImportService

        digits = normalize_cnpj(cnpj)
        if not is_valid_document(digits):
            raise RegistrationError("CPF/CNPJ inválido. Informe 11 ou 14 dígitos.", details={'cnpj': cnpj})
        if not name or not email or not password:
            raise RegistrationError("Nome, e-mail e senha são obrigatórios.")

        if Agency.objects.filter(cnpj=digits).exists():
            raise RegistrationError("Já existe uma agência cadastrada com este CNPJ.", details={'cnpj': digits})
        if User.objects.filter(username=digits).exists():
            raise RegistrationError("Já existe um usuário cadastrado com este CNPJ.", details={'cnpj': digits})

        items = list(PointsImportItem.objects.filter(cnpj=digits).values('branch', 'executive_name'))
        if not items:
            raise RegistrationError(
                "CNPJ não encontrado nas importações de pontos. Procure seu executivo de contas.",
                details={'cnpj': digits},
            )

        with UnitOfWork() as uow:
            user = User.objects.create_user(username=digits, email=email, password=password, first_name=name[:150])
            agency = Agency.objects.create(
                cnpj=digits,
                name=name,
                email=email,
                phone=phone or '',
                branch=_most_common(item['branch'] for item in items),
                executive_name=_most_common(item['executive_name'] for item in items),
                user=user,
                active=True,
            )
            credited = PointsImportService.credit_pending_items(uow, agency)

        logger.info(f"Agência {agency.pk} cadastrada ({format_cnpj(digits)}), {credited} itens creditados")
        return agency

    @staticmethod
    def set_active(agency, active):
        """Ativação só é permitida com saldo positivo no momento."""
        active = bool(active)
        if active:
            balance = LedgerService.get_balance(agency.pk)
            if balance <= 0:
                raise AgencyActivationError(
                    f"Agência não pode ser ativada: saldo atual de {balance} pontos.",
                    details={'agency_id': agency.pk, 'balance': balance},
                )

        if agency.active != active:
            agency.active = active
            agency.save(update_fields=['active', 'updated_at'])
            logger.info(f"Agência {agency.pk} {'ativada' if active else 'desativada'}")
        return agency

    @classmethod
    def update(cls, agency, **fields):
        active = fields.pop('active', None)

        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Campos não permitidos: {', '.join(sorted(unknown))}")

        if fields:
            for field, value in fields.items():
                setattr(agency, field, value)
            agency.save(update_fields=list(fields) + ['updated_at'])

        if active is not None:
            cls.set_active(agency, active)
        return agency
