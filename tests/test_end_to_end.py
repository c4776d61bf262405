"""
Full purchase lifecycle: request → approval → execution → review → reception → closing
"""
import json
from decimal import Decimal

import pytest

from apps.inventory.models import ProductStock
from apps.purchases.execution import ExecutionService
from apps.purchases.models import DocumentStatus, PurchaseInvoice, PurchaseRequest, RequestStatus
from apps.purchases.reception import ReceptionService
from apps.purchases.services import PurchaseRequestService
from tests.factories import ProductFactory


@pytest.mark.django_db
def test_purchase_lifecycle(requester, ceo, logistics, accountant, warehouse, branch, pdf_file):
    product = ProductFactory(name='P1')

    created = PurchaseRequestService.create_request(
        requester, branch.pk, "Compra de P1", '250.00', quotation_files=[pdf_file('cot.pdf')]
    )
    assert created.success
    request_id = created.data['request_id']
    quotation = PurchaseRequest.objects.get(pk=request_id).quotations.get()

    assert PurchaseRequestService.approve_request(ceo, request_id, "OK", quotation.pk).success

    payload = json.dumps([{
        'tempId': '1', 'providerRuc': '20123456789', 'providerName': 'ACME SAC',
        'number': 'INV-001', 'vouchers': [{'tempId': 'a', 'number': 'V-1', 'date': '2026-01-10'}],
    }])
    files = {'file_invoice_1': pdf_file('f.pdf'), 'file_voucher_1_a': pdf_file('v.pdf')}
    assert ExecutionService.register_execution(logistics, request_id, payload, files).success

    invoice = PurchaseInvoice.objects.get(invoice_number='INV-001')
    voucher = invoice.vouchers.get()
    assert ExecutionService.validate_document(accountant, 'INVOICE', invoice.pk, DocumentStatus.VALIDATED).success

    # Voucher still pending: closing is not possible yet
    assert PurchaseRequestService.complete_purchase(logistics, request_id).success
    closing = PurchaseRequestService.validate_purchase_order(logistics, request_id)
    assert not closing.success
    assert closing.message == "Hay 1 documento(s) pendientes de revisión."

    assert ExecutionService.validate_document(accountant, 'VOUCHER', voucher.pk, DocumentStatus.VALIDATED).success

    received = ReceptionService.register_reception(
        warehouse, request_id, invoice.pk, [{'product_id': product.pk, 'quantity': 10}], guide_number='GR-1'
    )
    assert received.success
    assert ProductStock.objects.get(branch=branch, product=product).stock_current == Decimal('10')

    closed = PurchaseRequestService.validate_purchase_order(logistics, request_id)
    assert closed.message == "✅ Compra VALIDADA. Expediente cerrado."
    assert PurchaseRequest.objects.get(pk=request_id).status == RequestStatus.VALIDATED

    # Closed file: nothing else changes
    assert not PurchaseRequestService.update_request(requester, request_id, branch.pk, "X", 1).success
    assert not ExecutionService.register_execution(logistics, request_id, payload, files).success
    assert not ReceptionService.register_reception(
        warehouse, request_id, invoice.pk, [{'product_id': product.pk, 'quantity': 1}]
    ).success
    assert not PurchaseRequestService.reject_request(ceo, request_id, "Demasiado tarde").success
