"""
Reception stage - goods received against an invoice enter the branch stock.
"""
import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from django.core.files.storage import default_storage
from django.db.models import Count, Min
from django.utils import timezone

from apps.accounts.permissions import Capability
from apps.core.exceptions import BusinessRuleError, InvalidInputError
from apps.core.services import ActionResult, parse_decimal, parse_id, service_action
from apps.core.uploads import RECEPTIONS_DIR, unique_name
from apps.inventory.models import InventoryMovement, MovementConcept, MovementType
from apps.inventory.services import StockService
from apps.products.models import Product

from . import workflow
from .models import DocumentStatus, PurchaseRequest

logger = logging.getLogger(__name__)


@dataclass
class ReceptionLine:
    quantity: Decimal
    product_id: Optional[int] = None
    product_name: str = ''
    unit_measure: str = ''


def parse_reception_items(items):
    """
    Accepts the items JSON (or decoded list) of
    {product_id, product_name, quantity, unit_measure} objects.
    """
    if isinstance(items, (str, bytes)):
        try:
            items = json.loads(items)
        except ValueError:
            raise InvalidInputError('MALFORMED_PAYLOAD')
    if not isinstance(items, list):
        raise InvalidInputError('MALFORMED_PAYLOAD')

    lines = []
    for raw in items:
        if not isinstance(raw, dict):
            raise InvalidInputError('MALFORMED_PAYLOAD')
        product_id = raw.get('product_id')
        lines.append(ReceptionLine(
            quantity=parse_decimal(raw.get('quantity', 0)),
            product_id=parse_id(product_id, 'MALFORMED_PAYLOAD') if product_id not in (None, '') else None,
            product_name=str(raw.get('product_name') or '').strip(),
            unit_measure=str(raw.get('unit_measure') or '').strip(),
        ))
    return lines


def _resolve_product(line):
    if line.product_id:
        product = Product.objects.filter(pk=line.product_id).first()
    else:
        product = Product.objects.filter(name__iexact=line.product_name).order_by('pk').first()
    if product is None:
        raise BusinessRuleError('NOT_FOUND', f"Producto '{line.product_name or line.product_id}' no encontrado.")
    return product


class ReceptionService:

    @staticmethod
    @service_action(Capability.REGISTER_RECEPTION)
    def register_reception(user, request_id, invoice_id, items, guide_number='', guide_file=None):
        """
        Registers received goods: one INGRESO/COMPRA movement per line with a
        positive quantity, added to the stock of the request's branch.
        """
        if not request_id or not invoice_id or items in (None, ''):
            raise InvalidInputError('INVALID_INPUT', "Datos incompletos.")
        lines = parse_reception_items(items)
        if not lines:
            raise InvalidInputError('INVALID_INPUT', "Sin items.")

        request = (
            PurchaseRequest.objects
            .select_for_update()
            .select_related('branch')
            .filter(pk=parse_id(request_id))
            .first()
        )
        if request is None:
            raise BusinessRuleError('NOT_FOUND', "Solicitud no encontrada")
        workflow.require_status(request, workflow.RECEIVABLE, f"No se puede recepcionar en estado: {request.status}")

        invoice = (
            request.invoices
            .exclude(status=DocumentStatus.REJECTED)
            .filter(pk=parse_id(invoice_id, message="Factura inválida."))
            .first()
        )
        if invoice is None:
            raise BusinessRuleError('NOT_FOUND', "La factura no pertenece a la solicitud o fue rechazada.")

        # Resolve every product before touching stock or storage
        resolved = [(line, _resolve_product(line)) for line in lines if line.quantity > 0]

        stored_file = None
        if resolved and guide_file and guide_file.size > 0:
            stored_file = default_storage.save(
                f"{RECEPTIONS_DIR}/{unique_name(f'GUIA-{request.pk}', guide_file.name)}", guide_file
            )

        received_at = timezone.now()
        for line, product in resolved:
            StockService.apply_movement(
                user=user,
                branch=request.branch,
                product=product,
                movement_type=MovementType.IN,
                concept=MovementConcept.PURCHASE,
                quantity=line.quantity,
                request=request,
                invoice=invoice,
                document_number=(guide_number or '').strip(),
                document_file=stored_file,
                unit_measure=line.unit_measure,
                timestamp=received_at,
            )

        logger.info(
            f"Recepción de {request.number} (factura {invoice.invoice_number}): "
            f"{len(resolved)} ítems por {user.username}"
        )
        return ActionResult.ok("Recepción registrada correctamente.", items=len(resolved))

    @staticmethod
    def get_request_receptions(request_id):
        """Reception movements of a request grouped by guide (one row per reception)"""
        return list(
            InventoryMovement.objects
            .filter(request_id=request_id, concept=MovementConcept.PURCHASE, type=MovementType.IN)
            .values('document_number', 'document_file', 'created_at', 'user__username', 'invoice__invoice_number')
            .annotate(first_id=Min('id'), items_count=Count('id'))
            .order_by('-created_at')
        )
