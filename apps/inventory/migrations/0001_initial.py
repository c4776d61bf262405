import apps.core.uploads
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('branches', '0001_initial'),
        ('products', '0001_initial'),
        ('purchases', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ProductStock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('stock_current', models.DecimalField(decimal_places=4, default=0, max_digits=12, verbose_name='Stock Actual')),
                ('min_stock', models.DecimalField(decimal_places=4, default=0, max_digits=12, verbose_name='Stock Mínimo')),
                ('reorder_point', models.DecimalField(decimal_places=4, default=0, max_digits=12, verbose_name='Punto de Reposición')),
                ('last_update', models.DateTimeField(auto_now=True)),
                ('branch', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to='branches.branch', verbose_name='Sucursal')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stocks', to='products.product')),
            ],
            options={
                'verbose_name': 'Stock por Sucursal',
                'verbose_name_plural': 'Stock por Sucursal',
                'constraints': [models.UniqueConstraint(fields=('branch', 'product'), name='unique_stock_per_branch_product')],
            },
        ),
        migrations.CreateModel(
            name='InventoryMovement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('INGRESO', 'Ingreso'), ('SALIDA', 'Salida')], max_length=10)),
                ('concept', models.CharField(choices=[('COMPRA', 'Compra'), ('AJUSTE', 'Ajuste')], max_length=10)),
                ('quantity', models.DecimalField(decimal_places=4, max_digits=12)),
                ('unit_measure', models.CharField(blank=True, max_length=10)),
                ('balance_after', models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ('document_number', models.CharField(blank=True, max_length=100, verbose_name='N° Documento / Guía')),
                ('document_file', models.FileField(blank=True, max_length=255, upload_to=apps.core.uploads.reception_upload_to)),
                ('reason', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('branch', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to='branches.branch', verbose_name='Sucursal')),
                ('invoice', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='movements', to='purchases.purchaseinvoice')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='movements', to='products.product')),
                ('request', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='movements', to='purchases.purchaserequest')),
                ('user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Movimiento',
                'verbose_name_plural': 'Movimientos',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['branch', 'product', 'created_at'], name='movement_branch_product_idx')],
            },
        ),
    ]
