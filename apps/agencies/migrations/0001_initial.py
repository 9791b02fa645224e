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
            name='Agency',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('cnpj', models.CharField(help_text='Apenas dígitos', max_length=14, unique=True, verbose_name='CPF/CNPJ')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('email', models.EmailField(max_length=254, verbose_name='E-mail')),
                ('phone', models.CharField(blank=True, max_length=20, verbose_name='Telefone')),
                ('branch', models.CharField(blank=True, max_length=100, verbose_name='Filial')),
                ('executive_name', models.CharField(blank=True, max_length=150, verbose_name='Executivo')),
                ('active', models.BooleanField(default=False, verbose_name='Ativa')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='agency',
                    to=settings.AUTH_USER_MODEL,
                    verbose_name='Usuário de acesso',
                )),
            ],
            options={
                'verbose_name': 'Agência',
                'verbose_name_plural': 'Agências',
                'ordering': ['name'],
            },
        ),
    ]
