# Generated manually for Loyalty Points

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
            ],
            options={
                'verbose_name': 'Categoria',
                'verbose_name_plural': 'Categorias',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome do Produto')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('quantity', models.PositiveIntegerField(default=0, verbose_name='Estoque')),
                ('active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='products',
                    to='catalog.category',
                )),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='ProductVariant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('model', models.CharField(blank=True, max_length=100, verbose_name='Modelo')),
                ('size', models.CharField(blank=True, max_length=20, verbose_name='Tamanho')),
                ('stock', models.PositiveIntegerField(default=0, verbose_name='Estoque')),
                ('active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='variants',
                    to='catalog.product',
                )),
            ],
            options={
                'verbose_name': 'Variação de Produto',
                'verbose_name_plural': 'Variações de Produtos',
                'ordering': ['product', 'model', 'size'],
            },
        ),
        migrations.CreateModel(
            name='ProductPrice',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('value', models.PositiveIntegerField(verbose_name='Pontos por unidade')),
                ('batch', models.PositiveIntegerField(verbose_name='Lote')),
                ('purchase_cap', models.PositiveIntegerField(default=0, verbose_name='Quantidade por agência')),
                ('active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='prices',
                    to='catalog.product',
                )),
            ],
            options={
                'verbose_name': 'Lote de Preço',
                'verbose_name_plural': 'Lotes de Preço',
                'ordering': ['batch', 'id'],
            },
        ),
        migrations.CreateModel(
            name='HeroBanner',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('banner_type', models.CharField(
                    choices=[('PRODUCT', 'Produto'), ('EXTERNAL', 'Externo')],
                    default='PRODUCT',
                    max_length=10,
                )),
                ('external_url', models.URLField(blank=True, null=True)),
                ('link_type', models.CharField(
                    blank=True,
                    choices=[('EXTERNAL_URL', 'URL Externa'), ('PRODUCTS_PAGE', 'Página de Produtos'), ('NONE', 'Sem Link')],
                    max_length=20,
                    null=True,
                )),
                ('image_desktop', models.CharField(blank=True, max_length=255)),
                ('image_mobile', models.CharField(blank=True, max_length=255)),
                ('display_order', models.PositiveIntegerField(default=0)),
                ('display_duration', models.PositiveIntegerField(default=5, help_text='Segundos')),
                ('active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.OneToOneField(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='hero_banner',
                    to='catalog.product',
                )),
            ],
            options={
                'verbose_name': 'Banner',
                'verbose_name_plural': 'Banners',
                'ordering': ['display_order', 'created_at'],
            },
        ),
    ]
