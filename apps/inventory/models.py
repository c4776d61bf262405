"""
Inventory App - Stock per branch and the movement ledger
"""
import logging

from django.conf import settings
from django.db import models
from django.db.models import BooleanField, Case, CharField, ExpressionWrapper, F, Q, Value, When
from django.utils import timezone

from apps.branches.models import BranchMixin
from apps.core.uploads import reception_upload_to
from apps.products.models import Product

logger = logging.getLogger(__name__)


class MovementType(models.TextChoices):
    IN = 'INGRESO', 'Ingreso'
    OUT = 'SALIDA', 'Salida'


class MovementConcept(models.TextChoices):
    PURCHASE = 'COMPRA', 'Compra'
    ADJUSTMENT = 'AJUSTE', 'Ajuste'


class StockStatus(models.TextChoices):
    CRITICAL = 'CRITICAL', 'Crítico'
    WARNING = 'WARNING', 'Reponer'
    OK = 'OK', 'Normal'


class InventoryMovement(BranchMixin):
    """Immutable record of any stock change"""
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='movements')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True)
    type = models.CharField(max_length=10, choices=MovementType.choices)
    concept = models.CharField(max_length=10, choices=MovementConcept.choices)
    quantity = models.DecimalField(max_digits=12, decimal_places=4)
    unit_measure = models.CharField(max_length=10, blank=True)
    balance_after = models.DecimalField(max_digits=12, decimal_places=4, default=0)

    # Origen del movimiento (recepciones de compra)
    request = models.ForeignKey(
        'purchases.PurchaseRequest',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='movements'
    )
    invoice = models.ForeignKey(
        'purchases.PurchaseInvoice',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='movements'
    )
    document_number = models.CharField(max_length=100, blank=True, verbose_name="N° Documento / Guía")
    document_file = models.FileField(upload_to=reception_upload_to, max_length=255, blank=True)
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = "Movimiento"
        verbose_name_plural = "Movimientos"
        indexes = [
            models.Index(fields=['branch', 'product', 'created_at'], name='movement_branch_product_idx'),
        ]

    def __str__(self):
        return f"{self.get_type_display()} {self.quantity} {self.unit_measure} {self.product.name}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Los movimientos de inventario no se pueden modificar.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Los movimientos de inventario no se pueden eliminar.")


class ProductStockQuerySet(models.QuerySet):
    def with_status(self):
        """Annotates status_code (CRITICAL/WARNING/OK) and is_critical"""
        return self.annotate(
            status_code=Case(
                When(stock_current__lte=F('min_stock'), then=Value(StockStatus.CRITICAL.value)),
                When(stock_current__lte=F('reorder_point'), then=Value(StockStatus.WARNING.value)),
                default=Value(StockStatus.OK.value),
                output_field=CharField(),
            ),
            is_critical=ExpressionWrapper(Q(stock_current__lte=F('min_stock')), output_field=BooleanField()),
        )

    def critical_first(self):
        return self.with_status().order_by('-is_critical', 'branch__name', 'product__name')


class ProductStock(BranchMixin):
    """
    Current stock of a product in a branch.
    stock_current only changes through StockService (select_for_update + ledger row).
    """
    _allow_stock_change = False

    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='stocks')
    stock_current = models.DecimalField(max_digits=12, decimal_places=4, default=0, verbose_name="Stock Actual")
    min_stock = models.DecimalField(max_digits=12, decimal_places=4, default=0, verbose_name="Stock Mínimo")
    reorder_point = models.DecimalField(max_digits=12, decimal_places=4, default=0, verbose_name="Punto de Reposición")
    last_update = models.DateTimeField(auto_now=True)

    objects = ProductStockQuerySet.as_manager()

    class Meta:
        verbose_name = "Stock por Sucursal"
        verbose_name_plural = "Stock por Sucursal"
        constraints = [
            models.UniqueConstraint(fields=['branch', 'product'], name='unique_stock_per_branch_product'),
        ]

    def __str__(self):
        return f"{self.product.name} @ {self.branch.name}: {self.stock_current}"

    def save(self, *args, **kwargs):
        # LOCKDOWN: existing rows keep their stock unless StockService allows it
        if not self._state.adding and not self._allow_stock_change:
            stored = ProductStock.objects.filter(pk=self.pk).values_list('stock_current', flat=True).first()
            if stored is not None and stored != self.stock_current:
                logger.warning(f"Cambio de stock fuera de StockService ignorado (stock {self.pk})")
                self.stock_current = stored
        super().save(*args, **kwargs)
        self._allow_stock_change = False

    @property
    def stock_status(self):
        if self.stock_current <= self.min_stock:
            return StockStatus.CRITICAL
        if self.stock_current <= self.reorder_point:
            return StockStatus.WARNING
        return StockStatus.OK
