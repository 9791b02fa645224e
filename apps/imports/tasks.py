"""
Celery tasks for points imports
"""
import logging

from celery import shared_task
from celery.exceptions import SoftTimeLimitExceeded

from .models import ImportStatus, PointsImport
from .services import PointsImportService

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    soft_time_limit=240,
    time_limit=300
)
def process_points_import_task(self, import_id):
    """Processa uma importação pendente. Importações já concluídas são ignoradas."""
    try:
        points_import = PointsImport.objects.get(id=import_id)
    except PointsImport.DoesNotExist:
        logger.warning(f"Importação #{import_id} não encontrada")
        return f"Import {import_id} not found"

    if points_import.status == ImportStatus.DONE:
        return f"Idempotent skip: import {import_id} already processed"

    try:
        PointsImportService.process(points_import)
    except SoftTimeLimitExceeded:
        PointsImport.objects.filter(id=import_id).update(
            status=ImportStatus.FAILED,
            error_message="Timeout - processamento interrompido. Tente dividir o arquivo.",
        )
        raise

    return f"Import {import_id}: {points_import.inserted_rows} inserted, {points_import.skipped_rows} skipped"
