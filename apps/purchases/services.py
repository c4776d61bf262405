"""
Purchase request service - intake, approval and closing stages.

All mutations lock the request row and go through the workflow table, so two
concurrent actions on the same request are serialized by the database.
"""
import logging

from django.db.models import Count, Q
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.accounts.permissions import Capability, get_profile, has_capability
from apps.branches.models import Branch
from apps.core.exceptions import BusinessRuleError, InvalidInputError
from apps.core.services import CURRENCIES, ActionResult, parse_id, parse_positive, service_action
from apps.core.uploads import delete_on_commit

from . import workflow
from .models import (
    Currency,
    DocumentStatus,
    PurchaseInvoice,
    PurchasePayment,
    PurchaseQuotation,
    PurchaseRequest,
    RequestStatus,
)

logger = logging.getLogger(__name__)

NOT_EDITABLE_MESSAGE = "Solicitud no editable"
MIN_REASON_LENGTH = 5


def _lock_request(request_id, message="Solicitud no encontrada"):
    request = PurchaseRequest.objects.select_for_update().filter(pk=parse_id(request_id)).first()
    if request is None:
        raise BusinessRuleError('NOT_FOUND', message)
    return request


def _clean_request_fields(branch_id, description, estimated_total, currency, issue_date):
    description = (description or '').strip()
    if not branch_id or not description or estimated_total in (None, ''):
        raise InvalidInputError('MISSING_FIELDS')

    branch = Branch.objects.active().filter(pk=parse_id(branch_id, message="Sucursal inválida.")).first()
    if branch is None:
        raise BusinessRuleError('NOT_FOUND', "Sucursal no encontrada.")

    total = parse_positive(estimated_total, 'INVALID_INPUT', "Total estimado inválido.")

    currency = currency or Currency.PEN
    if currency not in Currency.values:
        raise InvalidInputError('INVALID_INPUT', "Moneda inválida.")

    if not issue_date:
        issue_date = timezone.localdate()
    elif isinstance(issue_date, str):
        parsed = parse_date(issue_date)
        if parsed is None:
            raise InvalidInputError('INVALID_INPUT', "Fecha de emisión inválida.")
        issue_date = parsed

    return branch, description, total, currency, issue_date


def _attach_quotations(request, files):
    created = 0
    for uploaded in files or ():
        if uploaded and uploaded.size > 0:
            PurchaseQuotation.objects.create(request=request, file=uploaded, file_name=uploaded.name)
            created += 1
    return created


class PurchaseRequestService:

    @staticmethod
    @service_action(Capability.CREATE_REQUEST)
    def create_request(user, branch_id, description, estimated_total, currency=Currency.PEN,
                       issue_date=None, quotation_files=()):
        branch, description, total, currency, issue_date = _clean_request_fields(
            branch_id, description, estimated_total, currency, issue_date
        )

        request = PurchaseRequest.objects.create(
            branch=branch,
            requester=user,
            description=description,
            estimated_total=total,
            currency=currency,
            issue_date=issue_date,
        )
        quotations = _attach_quotations(request, quotation_files)

        logger.info(f"Solicitud {request.number} creada por {user.username} ({quotations} cotizaciones)")
        return ActionResult.ok("Solicitud registrada", request_id=request.pk)

    @staticmethod
    @service_action(Capability.EDIT_REQUEST)
    def update_request(user, request_id, branch_id, description, estimated_total, currency=Currency.PEN,
                       new_files=(), deleted_quotation_ids=()):
        request = _lock_request(request_id, NOT_EDITABLE_MESSAGE)
        workflow.require_status(request, workflow.EDITABLE, NOT_EDITABLE_MESSAGE)

        branch, description, total, currency, _ = _clean_request_fields(
            branch_id, description, estimated_total, currency, request.issue_date
        )
        request.branch = branch
        request.description = description
        request.estimated_total = total
        request.currency = currency
        request.save()

        ids = [parse_id(pk) for pk in deleted_quotation_ids or () if str(pk).strip()]
        if ids:
            quotations = request.quotations.filter(pk__in=ids)
            files = [q.file.name for q in quotations]
            quotations.delete()
            delete_on_commit(*files)

        _attach_quotations(request, new_files)

        logger.info(f"Solicitud {request.number} actualizada por {user.username}")
        return ActionResult.ok("Solicitud actualizada")

    @staticmethod
    @service_action(Capability.APPROVE_REQUEST)
    def approve_request(user, request_id, comment='', selected_quotation_id=None):
        """
        PENDIENTE → APROBADO. When a quotation id is given, it becomes the only
        selected quotation of the request.
        """
        request = _lock_request(request_id)
        workflow.transition(request, RequestStatus.APPROVED)

        if selected_quotation_id:
            quotation_id = parse_id(selected_quotation_id, message="Cotización inválida.")
            quotation = request.quotations.filter(pk=quotation_id).first()
            if quotation is None:
                raise BusinessRuleError('NOT_FOUND', "La cotización no pertenece a la solicitud.")
            request.quotations.filter(is_selected=True).update(is_selected=False)
            request.quotations.filter(pk=quotation.pk).update(is_selected=True)

        comment = (comment or '').strip()
        if comment:
            request.approval_comment = comment
        request.reviewed_by = user
        request.reviewed_at = timezone.now()
        request.save()

        logger.info(f"Solicitud {request.number} aprobada por {user.username}")
        return ActionResult.ok("Solicitud aprobada correctamente.")

    @staticmethod
    @service_action(Capability.REJECT_REQUEST)
    def reject_request(user, request_id, reason):
        reason = (reason or '').strip()
        if len(reason) < MIN_REASON_LENGTH:
            raise InvalidInputError('REASON_REQUIRED')

        request = _lock_request(request_id)
        workflow.transition(request, RequestStatus.REJECTED)
        request.approval_comment = reason
        request.reviewed_by = user
        request.reviewed_at = timezone.now()
        request.save()

        logger.info(f"Solicitud {request.number} rechazada por {user.username}")
        return ActionResult.ok("Solicitud rechazada")

    @staticmethod
    @service_action(Capability.COMPLETE_PURCHASE)
    def complete_purchase(user, request_id, purchased=False):
        """APROBADO → COMPLETADO (or COMPRA REALIZADA when `purchased`)"""
        request = _lock_request(request_id)
        workflow.require_status(
            request, workflow.EXECUTABLE, "Solo se pueden finalizar solicitudes aprobadas."
        )
        workflow.transition(request, RequestStatus.PURCHASED if purchased else RequestStatus.COMPLETED)
        request.save()

        logger.info(f"Solicitud {request.number} finalizada ({request.status}) por {user.username}")
        return ActionResult.ok("Compra finalizada correctamente.")

    @staticmethod
    @service_action(Capability.CLOSE_PURCHASE)
    def validate_purchase_order(user, request_id):
        """
        Closes the request (→ VALIDADA) once every invoice and voucher is VALIDADO.
        """
        request = _lock_request(request_id)
        workflow.require_status(
            request, workflow.CLOSABLE, "Solo se validan compras completadas."
        )

        pending = PurchaseRequestService.pending_documents(request)
        if pending:
            raise BusinessRuleError(
                'PENDING_DOCUMENTS',
                f"Hay {pending} documento(s) pendientes de revisión.",
                pending=pending,
            )

        workflow.transition(request, RequestStatus.VALIDATED)
        request.save()

        logger.info(f"Solicitud {request.number} VALIDADA por {user.username}")
        return ActionResult.ok("✅ Compra VALIDADA. Expediente cerrado.")

    @staticmethod
    def pending_documents(request):
        """Invoices plus vouchers of the request that are not VALIDADO"""
        invoices = PurchaseInvoice.objects.filter(request=request).exclude(status=DocumentStatus.VALIDATED).count()
        vouchers = PurchasePayment.objects.filter(invoice__request=request).exclude(status=DocumentStatus.VALIDATED).count()
        return invoices + vouchers

    # ============ LOOKUPS ============

    @staticmethod
    def get_request_details(request_id):
        request = (
            PurchaseRequest.objects
            .select_related('branch', 'requester', 'reviewed_by')
            .filter(pk=request_id)
            .first()
        )
        if request is None:
            return {'request': None, 'quotations': []}
        return {'request': request, 'quotations': list(request.quotations.all())}

    @staticmethod
    def list_requests_for(user, status=None, query=''):
        """
        Requests visible to the user: back office sees all, branch roles see their
        branch, requesters see their own.
        """
        requests = (
            PurchaseRequest.objects
            .select_related('branch', 'requester')
            .annotate(invoice_count=Count('invoices', distinct=True))
        )

        if not has_capability(user, Capability.VIEW_ALL_REQUESTS):
            profile = get_profile(user)
            if profile is not None and profile.is_branch_bound and profile.branch_id:
                requests = requests.filter(Q(branch_id=profile.branch_id) | Q(requester=user))
            else:
                requests = requests.filter(requester=user)

        if status:
            requests = requests.filter(status=status)
        query = (query or '').strip()
        if query:
            if query.isascii() and query.isdigit():
                requests = requests.filter(Q(pk=int(query)) | Q(description__icontains=query))
            else:
                requests = requests.filter(description__icontains=query)
        return requests.order_by('-created_at', '-id')

    @staticmethod
    def get_branches():
        return Branch.objects.active().order_by('name')

    @staticmethod
    def get_currencies():
        return CURRENCIES
