import json

import pytest
from django.core.files.storage import default_storage

from apps.partners.models import Provider
from apps.purchases.execution import ExecutionService, parse_execution_payload
from apps.purchases.models import DocumentStatus, PurchaseInvoice, PurchasePayment, RequestStatus
from tests.factories import (
    ProductFactory,
    PurchaseInvoiceFactory,
    PurchasePaymentFactory,
    PurchaseRequestFactory,
)


def payload(number='INV-001', ruc='20123456789', vouchers=(('a', 'V-1'),)):
    return json.dumps([{
        'tempId': '1',
        'providerRuc': ruc,
        'providerName': 'ACME SAC',
        'providerBranch': 'Av. Industrial 100',
        'number': number,
        'vouchers': [{'tempId': temp, 'number': num, 'date': '2026-01-10'} for temp, num in vouchers],
    }])


@pytest.fixture
def approved_request():
    return PurchaseRequestFactory(status=RequestStatus.APPROVED)


@pytest.fixture
def files(pdf_file):
    def _files(voucher_ids=('a',)):
        uploaded = {'file_invoice_1': pdf_file('factura.pdf')}
        for temp in voucher_ids:
            uploaded[f'file_voucher_1_{temp}'] = pdf_file(f'voucher_{temp}.pdf')
        return uploaded
    return _files


class TestPayloadParsing:
    def test_parses_groups_and_vouchers(self):
        groups = parse_execution_payload(payload())
        assert len(groups) == 1
        assert groups[0].provider_ruc == '20123456789'
        assert groups[0].file_key == 'file_invoice_1'
        assert groups[0].voucher_file_key(groups[0].vouchers[0]) == 'file_voucher_1_a'
        assert str(groups[0].vouchers[0].date) == '2026-01-10'

    @pytest.mark.parametrize('raw', ['not json', '{"a": 1}', '[1, 2]'])
    def test_malformed_payload(self, raw):
        from apps.core.exceptions import InvalidInputError

        with pytest.raises(InvalidInputError) as exc:
            parse_execution_payload(raw)
        assert exc.value.code == 'MALFORMED_PAYLOAD'


@pytest.mark.django_db
class TestRegisterExecution:
    def test_registers_provider_invoice_and_voucher(self, logistics, approved_request, files):
        result = ExecutionService.register_execution(logistics, approved_request.pk, payload(), files())

        assert result.success
        assert result.message == "Información registrada correctamente."
        assert result.data == {'invoices': 1, 'vouchers': 1, 'skipped': 0}

        provider = Provider.objects.get(ruc='20123456789')
        assert provider.address == 'Av. Industrial 100'
        invoice = PurchaseInvoice.objects.get(request=approved_request)
        assert invoice.provider == provider
        assert invoice.status == DocumentStatus.PENDING
        assert invoice.file.name.startswith('executions/')
        voucher = invoice.vouchers.get()
        assert voucher.voucher_number == 'V-1'
        assert str(voucher.payment_date) == '2026-01-10'

    def test_resending_same_voucher_is_noop(self, logistics, approved_request, files):
        ExecutionService.register_execution(logistics, approved_request.pk, payload(), files())

        result = ExecutionService.register_execution(logistics, approved_request.pk, payload(), {})

        assert result.success
        assert result.data == {'invoices': 0, 'vouchers': 0, 'skipped': 1}
        assert PurchaseInvoice.objects.count() == 1
        assert PurchasePayment.objects.count() == 1

    def test_voucher_collision_rolls_back_everything(self, logistics, approved_request, files):
        PurchasePaymentFactory(voucher_number='V-1')

        result = ExecutionService.register_execution(logistics, approved_request.pk, payload(), files())

        assert not result.success
        assert result.code == 'VOUCHER_COLLISION'
        assert result.message == "El N° de Operación V-1 ya fue utilizado."
        assert not PurchaseInvoice.objects.filter(request=approved_request).exists()
        assert not Provider.objects.filter(ruc='20123456789').exists()

    def test_invoice_of_another_request(self, logistics, approved_request, files):
        existing = PurchaseInvoiceFactory(invoice_number='INV-001')

        result = ExecutionService.register_execution(
            logistics, approved_request.pk, payload(ruc=existing.provider.ruc), files()
        )

        assert not result.success
        assert "ya está registrada en otra solicitud" in result.message

    def test_new_invoice_requires_file(self, logistics, approved_request):
        result = ExecutionService.register_execution(logistics, approved_request.pk, payload(vouchers=()), {})
        assert not result.success
        assert result.code == 'FILE_REQUIRED'

    def test_missing_provider_data(self, logistics, approved_request, files):
        result = ExecutionService.register_execution(logistics, approved_request.pk, payload(ruc=''), files())
        assert not result.success
        assert result.message == "Faltan datos proveedor en INV-001"

    def test_invalid_ruc_is_rejected(self, logistics, approved_request, files):
        result = ExecutionService.register_execution(logistics, approved_request.pk, payload(ruc='123'), files())
        assert not result.success
        assert PurchaseInvoice.objects.count() == 0

    def test_only_approved_requests(self, logistics, files):
        request = PurchaseRequestFactory()
        result = ExecutionService.register_execution(logistics, request.pk, payload(), files())
        assert not result.success
        assert result.code == 'INVALID_STATUS'

    def test_any_role_registers_while_approved(self, requester, approved_request, files):
        result = ExecutionService.register_execution(requester, approved_request.pk, payload(), files())
        assert result.success
        assert PurchaseInvoice.objects.filter(request=approved_request).count() == 1

    def test_requester_cannot_register_after_purchase(self, requester, files):
        request = PurchaseRequestFactory(status=RequestStatus.COMPLETED)
        result = ExecutionService.register_execution(requester, request.pk, payload(), files())
        assert not result.success
        assert result.code == 'INVALID_STATUS'

    def test_malformed_request_id(self, logistics, files):
        result = ExecutionService.register_execution(logistics, 'abc', payload(), files())
        assert not result.success
        assert result.code == 'INVALID_ID'


@pytest.mark.django_db
class TestDocumentReview:
    def test_validate_invoice(self, accountant):
        invoice = PurchaseInvoiceFactory(request__status=RequestStatus.APPROVED)

        result = ExecutionService.validate_document(accountant, 'INVOICE', invoice.pk, DocumentStatus.VALIDATED)

        assert result.success
        invoice.refresh_from_db()
        assert invoice.status == DocumentStatus.VALIDATED
        assert invoice.reviewed_by == accountant
        assert invoice.reviewed_at is not None

    def test_reject_voucher_requires_observation(self, accountant):
        voucher = PurchasePaymentFactory(invoice__request__status=RequestStatus.COMPLETED)

        assert not ExecutionService.validate_document(accountant, 'VOUCHER', voucher.pk, DocumentStatus.REJECTED).success

        result = ExecutionService.validate_document(
            accountant, 'VOUCHER', voucher.pk, DocumentStatus.REJECTED, "Monto no coincide"
        )
        assert result.success
        voucher.refresh_from_db()
        assert voucher.status == DocumentStatus.REJECTED
        assert voucher.observation == "Monto no coincide"

    def test_document_reviewed_once(self, accountant):
        invoice = PurchaseInvoiceFactory(request__status=RequestStatus.APPROVED, status=DocumentStatus.VALIDATED)
        result = ExecutionService.validate_document(accountant, 'INVOICE', invoice.pk, DocumentStatus.REJECTED, "x")
        assert not result.success

    def test_closed_request_refuses_review(self, accountant):
        invoice = PurchaseInvoiceFactory(request__status=RequestStatus.VALIDATED)
        result = ExecutionService.validate_document(accountant, 'INVOICE', invoice.pk, DocumentStatus.VALIDATED)
        assert not result.success
        assert result.code == 'INVALID_STATUS'

    def test_unknown_document_type(self, accountant):
        result = ExecutionService.validate_document(accountant, 'RECEIPT', 1, DocumentStatus.VALIDATED)
        assert not result.success

    def test_logistics_cannot_validate(self, logistics):
        invoice = PurchaseInvoiceFactory(request__status=RequestStatus.APPROVED)
        result = ExecutionService.validate_document(logistics, 'INVOICE', invoice.pk, DocumentStatus.VALIDATED)
        assert result.code == 'PERMISSION_DENIED'


@pytest.mark.django_db
class TestDeleteDocument:
    def test_delete_invoice_removes_vouchers_and_files(self, logistics, django_capture_on_commit_callbacks):
        voucher = PurchasePaymentFactory(invoice__request__status=RequestStatus.APPROVED)
        invoice = voucher.invoice
        names = [invoice.file.name, voucher.file.name]
        assert all(default_storage.exists(name) for name in names)

        with django_capture_on_commit_callbacks(execute=True):
            result = ExecutionService.delete_document(logistics, 'INVOICE', invoice.pk)

        assert result.success
        assert not PurchaseInvoice.objects.exists()
        assert not PurchasePayment.objects.exists()
        assert not any(default_storage.exists(name) for name in names)

    def test_validated_document_cannot_be_deleted(self, logistics):
        voucher = PurchasePaymentFactory(
            invoice__request__status=RequestStatus.APPROVED, status=DocumentStatus.VALIDATED
        )
        result = ExecutionService.delete_document(logistics, 'VOUCHER', voucher.pk)
        assert not result.success
        assert PurchasePayment.objects.exists()

    def test_invoice_with_receptions_cannot_be_deleted(self, logistics, warehouse, branch):
        from apps.purchases.reception import ReceptionService

        invoice = PurchaseInvoiceFactory(request__status=RequestStatus.APPROVED, request__branch=branch)
        product = ProductFactory()
        assert ReceptionService.register_reception(
            warehouse, invoice.request_id, invoice.pk, [{'product_id': product.pk, 'quantity': 1}]
        ).success

        result = ExecutionService.delete_document(logistics, 'INVOICE', invoice.pk)

        assert not result.success
        assert result.message == "La factura tiene recepciones registradas."

    def test_delete_only_while_approved(self, logistics):
        invoice = PurchaseInvoiceFactory(request__status=RequestStatus.COMPLETED)
        assert not ExecutionService.delete_document(logistics, 'INVOICE', invoice.pk).success
