"""
Points import pipeline

Rows arrive already parsed from the spreadsheet. Processing validates them,
stores the new sales and credits the ledger of every agency that already
exists for the imported CNPJs (one credit per import item).
"""
import hashlib
import json
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.agencies.models import Agency, is_valid_document, normalize_cnpj
from apps.core.exceptions import DuplicateImport
from apps.ledger.models import PointsLedgerEntry, SourceType
from apps.ledger.services import LedgerService
from apps.ledger.unit_of_work import UnitOfWork

from .models import ImportStatus, PointsImport, PointsImportItem

logger = logging.getLogger(__name__)

TEXT_FIELDS = ('agency_name', 'branch', 'store', 'executive_name', 'supplier', 'product_name', 'company')


class RowError(ValueError):
    pass


def compute_checksum(rows):
    payload = json.dumps(rows, sort_keys=True, default=str).encode('utf-8')
    return hashlib.sha256(payload).hexdigest()


def normalize_points(value):
    """Pontos inteiros e não negativos; aceita '1.234' ou '10,0' vindos da planilha."""
    if value is None or value == '':
        raise RowError("Pontos não informados")
    if isinstance(value, bool):
        raise RowError(f"Pontos inválidos: {value!r}")
    if isinstance(value, int):
        number = Decimal(value)
    else:
        text = str(value).strip().replace(' ', '').replace(',', '.')
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise RowError(f"Pontos inválidos: {value!r}")

    if number < 0:
        raise RowError(f"Pontos negativos não são permitidos: {value!r}")
    if number != number.to_integral_value():
        raise RowError(f"Pontos devem ser inteiros: {value!r}")
    return int(number)


def normalize_date(value):
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    parsed = parse_date(text)
    if parsed:
        return parsed
    try:
        return datetime.strptime(text, '%d/%m/%Y').date()
    except ValueError:
        raise RowError(f"Data da venda inválida: {value!r}")


def parse_row(row):
    cnpj = normalize_cnpj(row.get('cnpj'))
    if not is_valid_document(cnpj):
        raise RowError(f"CPF/CNPJ inválido: {row.get('cnpj')!r}")

    sale_id = str(row.get('sale_id') or '').strip()
    if not sale_id:
        raise RowError("ID da venda não informado")

    data = {
        'cnpj': cnpj,
        'sale_id': sale_id[:64],
        'sale_date': normalize_date(row.get('sale_date')),
        'points': normalize_points(row.get('points')),
    }
    for field in TEXT_FIELDS:
        data[field] = str(row.get(field) or '').strip()
    return data


class PointsImportService:

    @staticmethod
    def create_import(reference_period, checksum, rows, uploaded_by=None):
        """Registra a importação e agenda o processamento após o commit."""
        from .tasks import process_points_import_task

        rows = list(rows)
        checksum = checksum or compute_checksum(rows)
        if PointsImport.objects.filter(checksum=checksum).exists():
            raise DuplicateImport(details={'checksum': checksum})

        with transaction.atomic():
            points_import = PointsImport.objects.create(
                reference_period=reference_period or '',
                checksum=checksum,
                raw_rows=rows,
                uploaded_by=uploaded_by,
                total_rows=len(rows),
            )
            transaction.on_commit(lambda: process_points_import_task.delay(points_import.pk))

        logger.info(f"Importação #{points_import.pk} criada com {len(rows)} linhas")
        return points_import

    @classmethod
    def process(cls, points_import):
        points_import.status = ImportStatus.PROCESSING
        points_import.started_at = timezone.now()
        points_import.total_rows = len(points_import.raw_rows)
        points_import.save(update_fields=['status', 'started_at', 'total_rows'])

        try:
            inserted, skipped, messages = cls._store_items(points_import)
            credited = cls._credit_agencies(points_import)
        except Exception as e:
            logger.exception(f"Falha ao processar importação #{points_import.pk}")
            points_import.status = ImportStatus.FAILED
            points_import.error_message = str(e)
            points_import.finished_at = timezone.now()
            points_import.save(update_fields=['status', 'error_message', 'finished_at'])
            raise

        points_import.status = ImportStatus.DONE
        points_import.processed_rows = points_import.total_rows
        points_import.inserted_rows = inserted
        points_import.skipped_rows = skipped
        points_import.finished_at = timezone.now()
        messages.append(f"{inserted} inseridos, {skipped} ignorados, {credited} lançamentos no extrato")
        points_import.log = "\n".join(messages)
        points_import.save(update_fields=[
            'status', 'processed_rows', 'inserted_rows', 'skipped_rows', 'finished_at', 'log'
        ])
        logger.info(f"Importação #{points_import.pk}: {messages[-1]}")
        return points_import

    @staticmethod
    def _store_items(points_import):
        existing = set(
            PointsImportItem.objects.filter(
                sale_id__in=[str(r.get('sale_id') or '').strip() for r in points_import.raw_rows]
            ).values_list('sale_id', 'company')
        )

        items = []
        messages = []
        skipped = 0
        for index, row in enumerate(points_import.raw_rows, start=1):
            row_number = row.get('row_number') or index
            try:
                data = parse_row(row)
            except RowError as e:
                skipped += 1
                messages.append(f"Linha {row_number}: {e}")
                continue

            key = (data['sale_id'], data['company'])
            if key in existing:
                skipped += 1
                messages.append(f"Linha {row_number}: venda {data['sale_id']} já importada")
                continue
            existing.add(key)

            if data['points'] == 0:
                messages.append(f"Linha {row_number}: venda {data['sale_id']} sem pontos")

            items.append(PointsImportItem(points_import=points_import, row_number=row_number, **data))

        with transaction.atomic():
            PointsImportItem.objects.bulk_create(items)
        return len(items), skipped, messages

    @classmethod
    def _credit_agencies(cls, points_import):
        cnpjs = set(points_import.items.exclude(points=0).values_list('cnpj', flat=True))
        credited = 0
        for agency in Agency.objects.filter(cnpj__in=cnpjs):
            with UnitOfWork() as uow:
                credited += cls.credit_pending_items(uow, agency)
        return credited

    @staticmethod
    def credit_pending_items(uow, agency):
        """
        Credita no extrato todos os itens importados do CNPJ da agência que
        ainda não foram creditados. Idempotente: cada item gera no máximo um lançamento.
        """
        uow.ensure_active()
        items = list(PointsImportItem.objects.filter(cnpj=agency.cnpj, points__gt=0).order_by('id'))
        if not items:
            return 0

        already = set(
            PointsLedgerEntry.objects.filter(
                source_type=SourceType.IMPORT,
                source_id__in=[str(item.pk) for item in items],
            ).values_list('source_id', flat=True)
        )

        count = 0
        for item in items:
            if str(item.pk) in already:
                continue
            LedgerService.credit(
                uow, agency.pk, SourceType.IMPORT, item.pk, item.points,
                description=f"Importação #{item.points_import_id} - Venda {item.sale_id}",
            )
            count += 1
        return count
