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
            name='Client',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('client_type', models.CharField(choices=[('NAT', 'Persona Natural'), ('JUR', 'Persona Jurídica')], max_length=3, verbose_name='Tipo de Cliente')),
                ('doc_type', models.CharField(choices=[('DNI', 'DNI'), ('RUC', 'RUC'), ('CE', 'Carnet de Extranjería'), ('PAS', 'Pasaporte')], max_length=3, verbose_name='Tipo de Documento')),
                ('doc_number', models.CharField(max_length=12, verbose_name='N° Documento')),
                ('first_name', models.CharField(blank=True, max_length=100, verbose_name='Nombres')),
                ('paternal_surname', models.CharField(blank=True, max_length=100, verbose_name='Apellido Paterno')),
                ('maternal_surname', models.CharField(blank=True, max_length=100, verbose_name='Apellido Materno')),
                ('business_name', models.CharField(blank=True, max_length=200, verbose_name='Razón Social')),
                ('trade_name', models.CharField(blank=True, max_length=200, verbose_name='Nombre Comercial')),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('phone', models.CharField(blank=True, max_length=30, verbose_name='Teléfono')),
                ('address', models.CharField(blank=True, max_length=255, verbose_name='Dirección')),
                ('country', models.CharField(blank=True, default='PERÚ', max_length=100, verbose_name='País')),
                ('department', models.CharField(blank=True, max_length=100, verbose_name='Departamento')),
                ('province', models.CharField(blank=True, max_length=100, verbose_name='Provincia')),
                ('district', models.CharField(blank=True, max_length=100, verbose_name='Distrito')),
                ('zip_code', models.CharField(blank=True, max_length=10, verbose_name='Código Postal')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('deleted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Cliente',
                'verbose_name_plural': 'Clientes',
                'ordering': ['-created_at', '-id'],
                'constraints': [models.UniqueConstraint(condition=models.Q(('deleted_at__isnull', True)), fields=('doc_number',), name='unique_active_client_document')],
            },
        ),
    ]
