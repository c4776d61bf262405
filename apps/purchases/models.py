"""
Purchases App - Purchase requests and their documents

A request moves PENDIENTE → APROBADO/RECHAZADO → COMPLETADO/COMPRA REALIZADA
→ VALIDADA (see workflow.py). Requests are never physically deleted.
"""
from django.conf import settings
from django.db import models
from django.db.models import Q

from apps.branches.models import BranchMixin
from apps.core.uploads import invoice_upload_to, quotation_upload_to, voucher_upload_to


class RequestStatus(models.TextChoices):
    PENDING = 'PENDIENTE', 'Pendiente'
    APPROVED = 'APROBADO', 'Aprobado'
    REJECTED = 'RECHAZADO', 'Rechazado'
    PURCHASED = 'COMPRA REALIZADA', 'Compra Realizada'
    COMPLETED = 'COMPLETADO', 'Completado'
    VALIDATED = 'VALIDADA', 'Validada'


class DocumentStatus(models.TextChoices):
    PENDING = 'PENDIENTE', 'Pendiente'
    VALIDATED = 'VALIDADO', 'Validado'
    REJECTED = 'RECHAZADO', 'Rechazado'


class Currency(models.TextChoices):
    PEN = 'PEN', 'Soles'
    USD = 'USD', 'Dólares'


class PurchaseRequest(BranchMixin):
    """Solicitud de compra de una sucursal"""
    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='purchase_requests',
        verbose_name="Solicitante"
    )
    description = models.TextField(verbose_name="Descripción")
    estimated_total = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Total Estimado")
    currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.PEN)
    issue_date = models.DateField(verbose_name="Fecha de Emisión")
    status = models.CharField(
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING,
        db_index=True
    )
    approval_comment = models.TextField(blank=True, verbose_name="Comentario de Aprobación / Rechazo")
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_requests'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Solicitud de Compra"
        verbose_name_plural = "Solicitudes de Compra"
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"SOL-{self.pk:05d} ({self.get_status_display()})" if self.pk else "Nueva solicitud"

    @property
    def number(self):
        return f"SOL-{self.pk:05d}"

    def delete(self, *args, **kwargs):
        raise ValueError("Las solicitudes de compra no se eliminan.")


class PurchaseQuotation(models.Model):
    """Cotización adjunta a una solicitud"""
    request = models.ForeignKey(PurchaseRequest, on_delete=models.CASCADE, related_name='quotations')
    file = models.FileField(upload_to=quotation_upload_to, max_length=255)
    file_name = models.CharField(max_length=255, verbose_name="Nombre original")
    is_selected = models.BooleanField(default=False, verbose_name="Seleccionada")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Cotización"
        verbose_name_plural = "Cotizaciones"
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['request'],
                condition=Q(is_selected=True),
                name='one_selected_quotation_per_request'
            ),
        ]

    def __str__(self):
        return self.file_name


class ReviewableDocument(models.Model):
    """Document reviewed by the accountant (PENDIENTE → VALIDADO/RECHAZADO)"""
    status = models.CharField(
        max_length=10,
        choices=DocumentStatus.choices,
        default=DocumentStatus.PENDING,
        db_index=True
    )
    observation = models.TextField(blank=True, verbose_name="Observación")
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True

    @property
    def is_pending(self):
        return self.status == DocumentStatus.PENDING


class PurchaseInvoice(ReviewableDocument):
    """Factura del proveedor registrada en la ejecución"""
    request = models.ForeignKey(PurchaseRequest, on_delete=models.PROTECT, related_name='invoices')
    provider = models.ForeignKey('partners.Provider', on_delete=models.PROTECT, related_name='invoices')
    invoice_number = models.CharField(max_length=50, verbose_name="N° Factura")
    file = models.FileField(upload_to=invoice_upload_to, max_length=255)

    class Meta:
        verbose_name = "Factura de Compra"
        verbose_name_plural = "Facturas de Compra"
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['provider', 'invoice_number'], name='unique_invoice_per_provider'),
        ]

    def __str__(self):
        return f"{self.invoice_number} - {self.provider.name}"


class PurchasePayment(ReviewableDocument):
    """Voucher (comprobante de pago) de una factura"""
    invoice = models.ForeignKey(PurchaseInvoice, on_delete=models.CASCADE, related_name='vouchers')
    voucher_number = models.CharField(max_length=50, unique=True, verbose_name="N° de Operación")
    file = models.FileField(upload_to=voucher_upload_to, max_length=255)
    payment_date = models.DateField(null=True, blank=True, verbose_name="Fecha de Pago")

    class Meta:
        verbose_name = "Voucher de Pago"
        verbose_name_plural = "Vouchers de Pago"
        ordering = ['id']

    def __str__(self):
        return self.voucher_number
