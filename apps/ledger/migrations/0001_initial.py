# Generated manually for Loyalty Points

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('agencies', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PointsLedgerEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('source_type', models.CharField(
                    choices=[('IMPORT', 'Importação'), ('ORDER', 'Resgate (Pedido)'), ('ADJUSTMENT', 'Ajuste Manual')],
                    max_length=20,
                )),
                ('source_id', models.CharField(blank=True, default='', max_length=64)),
                ('points', models.IntegerField()),
                ('description', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('agency', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='ledger_entries',
                    to='agencies.agency',
                )),
                ('created_by', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                'verbose_name': 'Lançamento de Pontos',
                'verbose_name_plural': 'Extrato de Pontos',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['agency', 'created_at'], name='ledger_agency_created_idx')],
                'constraints': [
                    models.UniqueConstraint(
                        condition=models.Q(('source_type__in', ['IMPORT', 'ORDER'])),
                        fields=('source_type', 'source_id'),
                        name='unique_ledger_source',
                    ),
                ],
            },
        ),
    ]
