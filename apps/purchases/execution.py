"""
Execution stage - invoices and payment vouchers of an approved request.

The browser sends the invoice groups as JSON plus one upload per new document:

    [{"tempId": "1", "providerRuc": "20123456789", "providerName": "ACME SAC",
      "providerBranch": "", "number": "F001-123",
      "vouchers": [{"tempId": "a", "number": "OP-998", "date": "2026-01-10"}]}]

    files: file_invoice_<invoiceTempId>, file_voucher_<invoiceTempId>_<voucherTempId>
"""
import json
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.accounts.permissions import Capability
from apps.core.exceptions import BusinessRuleError, InvalidInputError
from apps.core.services import ActionResult, parse_id, service_action
from apps.core.uploads import delete_on_commit
from apps.partners.models import Provider

from . import workflow
from .models import DocumentStatus, PurchaseInvoice, PurchasePayment, PurchaseRequest

logger = logging.getLogger(__name__)

DOCUMENT_TYPES = ('INVOICE', 'VOUCHER')
REVIEW_RESULTS = (DocumentStatus.VALIDATED, DocumentStatus.REJECTED)


@dataclass
class VoucherEntry:
    temp_id: str
    number: str
    date: Optional[date] = None


@dataclass
class InvoiceGroup:
    temp_id: str
    provider_ruc: str
    provider_name: str
    number: str
    provider_branch: str = ''
    vouchers: list[VoucherEntry] = field(default_factory=list)

    @property
    def file_key(self):
        return f"file_invoice_{self.temp_id}"

    def voucher_file_key(self, voucher):
        return f"file_voucher_{self.temp_id}_{voucher.temp_id}"


def _text(value):
    return str(value).strip() if value is not None else ''


def parse_execution_payload(payload):
    """
    Builds InvoiceGroup entries from the JSON string (or already decoded list).

    Raises:
        InvalidInputError: MALFORMED_PAYLOAD if the structure is not a list of objects
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError:
            raise InvalidInputError('MALFORMED_PAYLOAD')

    if not isinstance(payload, list):
        raise InvalidInputError('MALFORMED_PAYLOAD')

    groups = []
    for raw in payload:
        if not isinstance(raw, dict) or not isinstance(raw.get('vouchers', []), list):
            raise InvalidInputError('MALFORMED_PAYLOAD')

        vouchers = []
        for raw_voucher in raw.get('vouchers', []):
            if not isinstance(raw_voucher, dict):
                raise InvalidInputError('MALFORMED_PAYLOAD')
            raw_date = _text(raw_voucher.get('date'))
            payment_date = parse_date(raw_date) if raw_date else None
            if raw_date and payment_date is None:
                raise InvalidInputError('INVALID_INPUT', f"Fecha de pago inválida: {raw_date}")
            vouchers.append(VoucherEntry(
                temp_id=_text(raw_voucher.get('tempId')),
                number=_text(raw_voucher.get('number')),
                date=payment_date,
            ))

        groups.append(InvoiceGroup(
            temp_id=_text(raw.get('tempId')),
            provider_ruc=_text(raw.get('providerRuc')),
            provider_name=_text(raw.get('providerName')),
            provider_branch=_text(raw.get('providerBranch')),
            number=_text(raw.get('number')),
            vouchers=vouchers,
        ))
    return groups


def _document_request(doc):
    return doc.request if isinstance(doc, PurchaseInvoice) else doc.invoice.request


def _lock_document(doc_type, doc_id):
    if doc_type not in DOCUMENT_TYPES:
        raise InvalidInputError('INVALID_INPUT', "Tipo de documento inválido.")
    model = PurchaseInvoice if doc_type == 'INVOICE' else PurchasePayment
    related = ['request'] if doc_type == 'INVOICE' else ['invoice__request']
    doc = model.objects.select_for_update().select_related(*related).filter(pk=parse_id(doc_id)).first()
    if doc is None:
        raise BusinessRuleError('NOT_FOUND', "Documento no encontrado.")
    return doc


class ExecutionService:

    @staticmethod
    @service_action(Capability.REGISTER_EXECUTION)
    def register_execution(user, request_id, payload, files):
        """
        Registers invoices and vouchers of an APROBADO request in one transaction.

        Providers are found or created by RUC; invoices by (number, provider).
        Re-sending a voucher already attached to the same invoice is a no-op.
        """
        groups = parse_execution_payload(payload)
        if not request_id or not groups:
            raise InvalidInputError('INVALID_INPUT', "Datos incompletos")

        request = PurchaseRequest.objects.select_for_update().filter(pk=parse_id(request_id)).first()
        if request is None:
            raise BusinessRuleError('NOT_FOUND', "Solicitud no encontrada")
        workflow.require_status(
            request, workflow.EXECUTABLE, "Solo se registran pagos en solicitudes aprobadas."
        )

        files = files or {}
        created_invoices = created_vouchers = skipped_vouchers = 0

        for group in groups:
            if not group.provider_ruc or not group.provider_name:
                raise InvalidInputError('MISSING_FIELDS', f"Faltan datos proveedor en {group.number}")
            if not group.number:
                raise InvalidInputError('MISSING_FIELDS', "Falta el número de factura.")

            provider, _ = Provider.get_or_create_by_ruc(
                group.provider_ruc, group.provider_name, address=group.provider_branch
            )

            invoice = PurchaseInvoice.objects.filter(invoice_number=group.number, provider=provider).first()
            if invoice is not None and invoice.request_id != request.pk:
                raise BusinessRuleError(
                    'INVALID_INPUT',
                    f"La factura {group.number} de {provider.ruc} ya está registrada en otra solicitud."
                )

            if invoice is None:
                invoice_file = files.get(group.file_key)
                if not invoice_file:
                    raise InvalidInputError('FILE_REQUIRED', f"Falta archivo factura {group.number}")
                invoice = PurchaseInvoice.objects.create(
                    request=request,
                    provider=provider,
                    invoice_number=group.number,
                    file=invoice_file,
                )
                created_invoices += 1

            for voucher in group.vouchers:
                if not voucher.number:
                    raise InvalidInputError('MISSING_FIELDS', f"Falta el N° de Operación en la factura {group.number}")

                existing = PurchasePayment.objects.filter(voucher_number=voucher.number).first()
                if existing is not None:
                    if existing.invoice_id == invoice.pk:
                        skipped_vouchers += 1
                        continue
                    raise BusinessRuleError(
                        'VOUCHER_COLLISION',
                        f"El N° de Operación {voucher.number} ya fue utilizado.",
                        voucher_number=voucher.number,
                    )

                voucher_file = files.get(group.voucher_file_key(voucher))
                if not voucher_file:
                    raise InvalidInputError('FILE_REQUIRED', f"Falta archivo para el voucher {voucher.number}")

                PurchasePayment.objects.create(
                    invoice=invoice,
                    voucher_number=voucher.number,
                    file=voucher_file,
                    payment_date=voucher.date,
                )
                created_vouchers += 1

        logger.info(
            f"Ejecución de {request.number}: {created_invoices} facturas, {created_vouchers} vouchers "
            f"({skipped_vouchers} repetidos) por {user.username}"
        )
        return ActionResult.ok(
            "Información registrada correctamente.",
            invoices=created_invoices,
            vouchers=created_vouchers,
            skipped=skipped_vouchers,
        )

    @staticmethod
    @service_action(Capability.VALIDATE_DOCUMENT)
    def validate_document(user, doc_type, doc_id, status, observation=''):
        """PENDIENTE → VALIDADO | RECHAZADO for an invoice or voucher"""
        if status not in REVIEW_RESULTS:
            raise InvalidInputError('INVALID_INPUT', "Estado de revisión inválido.")

        doc = _lock_document(doc_type, doc_id)
        request = _document_request(doc)
        if workflow.is_terminal(request.status):
            raise BusinessRuleError(
                'INVALID_STATUS', f"La solicitud está cerrada ({request.status}).", status=request.status
            )
        if not doc.is_pending:
            raise BusinessRuleError('INVALID_STATUS', "El documento ya fue revisado.")

        observation = (observation or '').strip()
        if status == DocumentStatus.REJECTED and not observation:
            raise InvalidInputError('REASON_REQUIRED', "Debe indicar el motivo del rechazo.")

        doc.status = status
        doc.observation = observation
        doc.reviewed_by = user
        doc.reviewed_at = timezone.now()
        doc.save()

        logger.info(f"{doc_type} {doc.pk} de {request.number} → {status} por {user.username}")
        return ActionResult.ok(f"Documento {status.lower()}.")

    @staticmethod
    @service_action(Capability.DELETE_DOCUMENT)
    def delete_document(user, doc_type, doc_id):
        """
        Removes a document that is not VALIDADO while the request is APROBADO.
        Deleting an invoice removes its vouchers too.
        """
        doc = _lock_document(doc_type, doc_id)
        request = _document_request(doc)
        workflow.require_status(
            request, workflow.EXECUTABLE, "Solo se eliminan documentos de solicitudes aprobadas."
        )
        if doc.status == DocumentStatus.VALIDATED:
            raise BusinessRuleError('INVALID_STATUS', "No se puede eliminar un documento validado.")

        files = [doc.file.name]
        if isinstance(doc, PurchaseInvoice):
            if doc.movements.exists():
                raise BusinessRuleError('INVALID_STATUS', "La factura tiene recepciones registradas.")
            vouchers = list(doc.vouchers.all())
            if any(v.status == DocumentStatus.VALIDATED for v in vouchers):
                raise BusinessRuleError('INVALID_STATUS', "La factura tiene vouchers validados.")
            files += [v.file.name for v in vouchers]

        doc.delete()
        delete_on_commit(*files)

        logger.info(f"{doc_type} {doc_id} de {request.number} eliminado por {user.username}")
        return ActionResult.ok("Documento eliminado.")

    # ============ LOOKUPS ============

    @staticmethod
    def get_execution_details(request_id):
        """Invoices of the request with provider and vouchers"""
        return list(
            PurchaseInvoice.objects
            .filter(request_id=request_id)
            .select_related('provider', 'reviewed_by')
            .prefetch_related('vouchers')
        )

    @staticmethod
    def get_request_invoices(request_id):
        """Invoices that can back a reception (not RECHAZADO)"""
        return list(
            PurchaseInvoice.objects
            .filter(request_id=request_id)
            .exclude(status=DocumentStatus.REJECTED)
            .values('id', 'invoice_number')
        )
