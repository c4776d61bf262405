"""
Server-rendered screens: dashboard, purchase requests, stock, exports and clients
"""
import io

import openpyxl
import pytest
from django.urls import reverse

from apps.clients.models import Client
from apps.inventory.models import ProductStock
from apps.purchases.models import PurchaseRequest, RequestStatus
from tests.factories import ClientFactory, PurchaseRequestFactory

HTMX = {'HTTP_HX_REQUEST': 'true'}


@pytest.mark.django_db
class TestAccessControl:
    def test_login_required(self, client):
        response = client.get(reverse('reports:dashboard'))
        assert response.status_code == 302
        assert '/accounts/login/' in response.url

    def test_dashboard_renders_summary(self, client, ceo, branch, product, add_stock):
        add_stock(branch, product, 1)
        ProductStock.objects.update(min_stock=5)
        PurchaseRequestFactory()
        client.force_login(ceo)

        response = client.get(reverse('reports:dashboard'))

        assert response.status_code == 200
        assert response.context['pending_count'] == 1
        assert response.context['critical_count'] == 1
        assert response.context['movements_today'] == 1


@pytest.mark.django_db
class TestPurchaseRequestViews:
    def test_create_redirects_to_detail(self, client, requester, branch, pdf_file):
        client.force_login(requester)
        response = client.post(reverse('purchases:request_create'), {
            'branch': branch.pk,
            'description': 'Tóner para impresoras',
            'estimated_total': '350.00',
            'currency': 'PEN',
            'quotations': [pdf_file('cot1.pdf'), pdf_file('cot2.pdf')],
        })

        purchase = PurchaseRequest.objects.get()
        assert response.status_code == 302
        assert response.url == reverse('purchases:request_detail', args=[purchase.pk])
        assert purchase.quotations.count() == 2
        assert purchase.requester == requester

    def test_list_partial_for_htmx(self, client, accountant):
        PurchaseRequestFactory(description='Sillas ergonómicas')
        client.force_login(accountant)

        response = client.get(reverse('purchases:request_list'), {'q': 'sillas'}, **HTMX)

        assert response.status_code == 200
        assert [t.name for t in response.templates][0] == 'purchases/partials/request_table.html'
        assert len(response.context['requests']) == 1

    def test_detail_flags(self, client, logistics):
        purchase = PurchaseRequestFactory(status=RequestStatus.APPROVED)
        client.force_login(logistics)

        response = client.get(reverse('purchases:request_detail', args=[purchase.pk]))

        assert response.status_code == 200
        assert response.context['is_executable'] is True
        assert response.context['is_editable'] is False

    def test_hidden_request_is_404(self, client, requester):
        purchase = PurchaseRequestFactory()
        client.force_login(requester)
        assert client.get(reverse('purchases:request_detail', args=[purchase.pk])).status_code == 404

    def test_approve_via_fetch_returns_json(self, client, ceo):
        purchase = PurchaseRequestFactory()
        client.force_login(ceo)

        response = client.post(
            reverse('purchases:request_approve', args=[purchase.pk]),
            {'comment': 'Procede'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        assert response.status_code == 200
        assert response.json() == {'success': True, 'message': "Solicitud aprobada correctamente."}

    def test_reject_requires_permission(self, client, accountant):
        purchase = PurchaseRequestFactory()
        client.force_login(accountant)

        response = client.post(
            reverse('purchases:request_reject', args=[purchase.pk]),
            {'reason': 'Presupuesto agotado'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        assert response.status_code == 400
        assert response.json()['message'] == "No tienes permiso para rechazar solicitudes."

    def test_edit_of_approved_request_redirects(self, client, ceo):
        purchase = PurchaseRequestFactory(status=RequestStatus.APPROVED)
        client.force_login(ceo)

        response = client.get(reverse('purchases:request_edit', args=[purchase.pk]))

        assert response.status_code == 302
        assert response.url == reverse('purchases:request_detail', args=[purchase.pk])

    def test_invoices_api(self, client, warehouse, branch):
        from tests.factories import PurchaseInvoiceFactory

        invoice = PurchaseInvoiceFactory(request__status=RequestStatus.APPROVED, request__branch=branch)
        client.force_login(warehouse)

        response = client.get(reverse('purchases:request_invoices_api', args=[invoice.request_id]))

        assert response.status_code == 200
        assert invoice.invoice_number in response.content.decode()


@pytest.mark.django_db
class TestStockViews:
    def test_stock_list_and_partial(self, client, warehouse, branch, product, add_stock):
        add_stock(branch, product, 4)
        client.force_login(warehouse)

        full = client.get(reverse('inventory:stock_list'))
        partial = client.get(reverse('inventory:stock_list'), {'q': 'bond'}, **HTMX)

        assert full.status_code == 200
        assert 'PAPEL BOND A4' in full.content.decode()
        assert partial.templates[0].name == 'inventory/partials/stock_table.html'

    def test_stock_list_with_malformed_branch(self, client, ceo, branch, product, add_stock):
        add_stock(branch, product, 4)
        client.force_login(ceo)

        response = client.get(reverse('inventory:stock_list'), {'branch': 'abc'})

        assert response.status_code == 200
        assert 'PAPEL BOND A4' in response.content.decode()

    def test_history_page(self, client, warehouse, branch, product, add_stock):
        add_stock(branch, product, 4)
        stock = ProductStock.objects.get()
        client.force_login(warehouse)

        response = client.get(reverse('inventory:product_history', args=[stock.pk]), {'start': '2020-13-45'})

        assert response.status_code == 200
        assert response.context['page_obj'].paginator.count == 1

    def test_history_of_other_branch_redirects(self, client, make_user, branch, product, add_stock):
        from apps.accounts.models import Role
        from tests.factories import BranchFactory

        add_stock(branch, product, 4)
        stock = ProductStock.objects.get()
        client.force_login(make_user(Role.WAREHOUSE, user_branch=BranchFactory()))

        response = client.get(reverse('inventory:product_history', args=[stock.pk]))
        assert response.status_code == 302

    def test_adjustment_form(self, client, warehouse, product):
        client.force_login(warehouse)

        response = client.post(reverse('inventory:manual_adjustment'), {
            'product': product.pk, 'movement_type': 'INGRESO', 'quantity': '7', 'reason': 'Conteo físico',
        })

        assert response.status_code == 302
        assert ProductStock.objects.get(product=product).stock_current == 7

    def test_requester_cannot_open_adjustments(self, client, requester):
        client.force_login(requester)
        response = client.get(reverse('inventory:manual_adjustment'))
        assert response.status_code == 302
        assert response.url == reverse('inventory:stock_list')


@pytest.mark.django_db
class TestExports:
    def test_stock_csv(self, client, ceo, branch, product, add_stock):
        add_stock(branch, product, 4)
        client.force_login(ceo)

        response = client.get(reverse('reports:export_stock_csv'))

        assert response.status_code == 200
        assert response['Content-Type'].startswith('text/csv')
        assert 'PAPEL BOND A4' in response.content.decode('utf-8-sig')

    def test_stock_excel(self, client, ceo, branch, product, add_stock):
        add_stock(branch, product, 4)
        client.force_login(ceo)

        response = client.get(reverse('reports:export_stock_excel'))

        assert response['Content-Type'] == 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        sheet = openpyxl.load_workbook(io.BytesIO(response.content)).active
        assert sheet.max_row == 2

    def test_movements_csv_with_bad_days(self, client, ceo, branch, product, add_stock):
        add_stock(branch, product, 4)
        client.force_login(ceo)

        response = client.get(reverse('reports:export_movements_csv'), {'days': 'abc'})

        assert response.status_code == 200
        assert 'Stock inicial' in response.content.decode('utf-8-sig')

    def test_movements_csv_with_malformed_branch(self, client, ceo, branch, product, add_stock):
        add_stock(branch, product, 4)
        client.force_login(ceo)

        response = client.get(reverse('reports:export_movements_csv'), {'branch': 'x'})

        assert response.status_code == 200
        assert 'PAPEL BOND A4' in response.content.decode('utf-8-sig')


@pytest.mark.django_db
class TestClientViews:
    def test_create_client(self, client, requester):
        client.force_login(requester)

        response = client.post(reverse('clients:client_create'), {
            'client_type': 'NAT',
            'doc_type': 'DNI',
            'doc_number': '70011122',
            'first_name': 'Lucía',
            'paternal_surname': 'Torres',
            'country': 'PERÚ',
        })

        assert response.status_code == 302
        assert Client.objects.get().doc_number == '70011122'

    def test_list_partial(self, client, requester):
        ClientFactory(first_name='ROSA')
        client.force_login(requester)

        response = client.get(reverse('clients:client_list'), {'q': 'rosa'}, **HTMX)

        assert response.templates[0].name == 'clients/partials/client_table.html'

    def test_delete_client(self, client, requester):
        target = ClientFactory()
        client.force_login(requester)

        response = client.post(reverse('clients:client_delete', args=[target.pk]))

        assert response.status_code == 302
        target.refresh_from_db()
        assert target.deleted_at is not None
