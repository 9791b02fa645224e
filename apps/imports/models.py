"""
Imports App - Points imported from sales spreadsheets
"""
from django.conf import settings
from django.db import models


class ImportStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pendente'
    PROCESSING = 'PROCESSING', 'Processando'
    DONE = 'DONE', 'Concluído'
    FAILED = 'FAILED', 'Falhou'


class PointsImport(models.Model):
    """
    Lote de importação de pontos.
    As linhas chegam já lidas da planilha (raw_rows) e são processadas em background.
    """
    reference_period = models.CharField(max_length=20, blank=True, verbose_name="Período de referência")
    uploaded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    uploaded_at = models.DateTimeField(auto_now_add=True)
    checksum = models.CharField(max_length=64, unique=True)
    raw_rows = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=20, choices=ImportStatus.choices, default=ImportStatus.PENDING)

    total_rows = models.PositiveIntegerField(default=0)
    processed_rows = models.PositiveIntegerField(default=0)
    inserted_rows = models.PositiveIntegerField(default=0)
    skipped_rows = models.PositiveIntegerField(default=0)

    started_at = models.DateTimeField(null=True, blank=True)
    finished_at = models.DateTimeField(null=True, blank=True)
    log = models.TextField(blank=True)
    error_message = models.TextField(blank=True)

    class Meta:
        verbose_name = "Importação de Pontos"
        verbose_name_plural = "Importações de Pontos"
        ordering = ['-uploaded_at']

    def __str__(self):
        return f"Importação #{self.pk} - {self.reference_period or 'sem período'} ({self.get_status_display()})"

    @property
    def progress_percent(self):
        if self.total_rows == 0:
            return 0
        return int((self.processed_rows / self.total_rows) * 100)


class PointsImportItem(models.Model):
    points_import = models.ForeignKey(PointsImport, on_delete=models.CASCADE, related_name='items')
    row_number = models.PositiveIntegerField()
    sale_id = models.CharField(max_length=64, verbose_name="ID da venda")
    sale_date = models.DateField(null=True, blank=True)
    cnpj = models.CharField(max_length=14, db_index=True)
    agency_name = models.CharField(max_length=255, blank=True)
    branch = models.CharField(max_length=100, blank=True)
    store = models.CharField(max_length=100, blank=True)
    executive_name = models.CharField(max_length=150, blank=True)
    supplier = models.CharField(max_length=150, blank=True)
    product_name = models.CharField(max_length=255, blank=True)
    company = models.CharField(max_length=100, blank=True)
    points = models.IntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Item de Importação"
        verbose_name_plural = "Itens de Importação"
        ordering = ['points_import', 'row_number']
        constraints = [
            models.UniqueConstraint(fields=['sale_id', 'company'], name='unique_import_sale'),
        ]

    def __str__(self):
        return f"Venda {self.sale_id} - {self.cnpj} ({self.points} pts)"
