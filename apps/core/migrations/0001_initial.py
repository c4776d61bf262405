from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='MasterCatalog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('category', models.CharField(choices=[('UNIT_MEASURE', 'Unidad de Medida'), ('CLIENT_TYPE', 'Tipo de Cliente'), ('DOC_TYPE', 'Tipo de Documento'), ('COUNTRY', 'País')], db_index=True, max_length=30)),
                ('code', models.CharField(max_length=20)),
                ('description', models.CharField(max_length=150)),
                ('num_1', models.CharField(blank=True, help_text='Código SUNAT u otro valor auxiliar', max_length=10)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'verbose_name': 'Catálogo Maestro',
                'verbose_name_plural': 'Catálogos Maestros',
                'ordering': ['category', 'description'],
                'unique_together': {('category', 'code')},
            },
        ),
    ]
