# Generated manually for Loyalty Points

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PointsImport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference_period', models.CharField(blank=True, max_length=20, verbose_name='Período de referência')),
                ('uploaded_at', models.DateTimeField(auto_now_add=True)),
                ('checksum', models.CharField(max_length=64, unique=True)),
                ('raw_rows', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(
                    choices=[('PENDING', 'Pendente'), ('PROCESSING', 'Processando'), ('DONE', 'Concluído'), ('FAILED', 'Falhou')],
                    default='PENDING',
                    max_length=20,
                )),
                ('total_rows', models.PositiveIntegerField(default=0)),
                ('processed_rows', models.PositiveIntegerField(default=0)),
                ('inserted_rows', models.PositiveIntegerField(default=0)),
                ('skipped_rows', models.PositiveIntegerField(default=0)),
                ('started_at', models.DateTimeField(blank=True, null=True)),
                ('finished_at', models.DateTimeField(blank=True, null=True)),
                ('log', models.TextField(blank=True)),
                ('error_message', models.TextField(blank=True)),
                ('uploaded_by', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                'verbose_name': 'Importação de Pontos',
                'verbose_name_plural': 'Importações de Pontos',
                'ordering': ['-uploaded_at'],
            },
        ),
        migrations.CreateModel(
            name='PointsImportItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('row_number', models.PositiveIntegerField()),
                ('sale_id', models.CharField(max_length=64, verbose_name='ID da venda')),
                ('sale_date', models.DateField(blank=True, null=True)),
                ('cnpj', models.CharField(db_index=True, max_length=14)),
                ('agency_name', models.CharField(blank=True, max_length=255)),
                ('branch', models.CharField(blank=True, max_length=100)),
                ('store', models.CharField(blank=True, max_length=100)),
                ('executive_name', models.CharField(blank=True, max_length=150)),
                ('supplier', models.CharField(blank=True, max_length=150)),
                ('product_name', models.CharField(blank=True, max_length=255)),
                ('company', models.CharField(blank=True, max_length=100)),
                ('points', models.IntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('points_import', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='items',
                    to='imports.pointsimport',
                )),
            ],
            options={
                'verbose_name': 'Item de Importação',
                'verbose_name_plural': 'Itens de Importação',
                'ordering': ['points_import', 'row_number'],
                'constraints': [
                    models.UniqueConstraint(fields=('sale_id', 'company'), name='unique_import_sale'),
                ],
            },
        ),
    ]
