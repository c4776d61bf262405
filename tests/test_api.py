"""
JSON API tests - JWT login, products, stock and purchase request actions
"""
import pytest

from apps.purchases.models import RequestStatus
from tests.factories import BranchFactory, ProductFactory, PurchaseRequestFactory


@pytest.mark.django_db
class TestJWTAuth:
    def test_token_with_email(self, client, logistics):
        response = client.post('/api/v1/auth/token/', {
            'username': logistics.email, 'password': 'password123'
        }, format='json')

        assert response.status_code == 200
        assert 'access' in response.data and 'refresh' in response.data

    def test_bearer_token_grants_access(self, client, logistics):
        token = client.post('/api/v1/auth/token/', {
            'username': logistics.username, 'password': 'password123'
        }, format='json').data['access']

        client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        assert client.get('/api/v1/products/').status_code == 200

    def test_inactive_profile_gets_no_token(self, client, logistics):
        logistics.profile.is_active = False
        logistics.profile.save()

        response = client.post('/api/v1/auth/token/', {
            'username': logistics.username, 'password': 'password123'
        }, format='json')
        assert response.status_code == 401

    def test_anonymous_is_rejected(self, client):
        assert client.get('/api/v1/stocks/').status_code == 401


@pytest.mark.django_db
class TestProductAPI:
    def test_logistics_creates_product(self, client, logistics):
        client.force_authenticate(user=logistics)
        response = client.post('/api/v1/products/', {'name': 'grapas', 'unit_measure': 'CJ'}, format='json')

        assert response.status_code == 201
        assert response.data['name'] == 'GRAPAS'
        assert response.data['code'].startswith('PROD-')

    def test_requester_cannot_create(self, client, requester):
        client.force_authenticate(user=requester)
        response = client.post('/api/v1/products/', {'name': 'grapas', 'unit_measure': 'CJ'}, format='json')
        assert response.status_code == 403

    def test_list_and_search(self, client, requester):
        ProductFactory(name='Grapas')
        ProductFactory(name='Lapiceros')
        client.force_authenticate(user=requester)

        response = client.get('/api/v1/products/', {'q': 'grap'})

        assert response.status_code == 200
        assert [p['name'] for p in response.data['results']] == ['GRAPAS']


@pytest.mark.django_db
class TestStockAPI:
    def test_store_role_sees_own_branch(self, client, warehouse, branch, product, add_stock):
        add_stock(branch, product, 3)
        add_stock(BranchFactory(), product, 8)
        client.force_authenticate(user=warehouse)

        response = client.get('/api/v1/stocks/')

        assert response.status_code == 200
        assert response.data['count'] == 1
        assert response.data['results'][0]['branch'] == branch.pk

    def test_status_filter(self, client, ceo, branch, add_stock):
        low, ok = ProductFactory.create_batch(2)
        add_stock(branch, low, 1)
        add_stock(branch, ok, 10)
        from apps.inventory.models import ProductStock
        ProductStock.objects.update(min_stock=2)
        client.force_authenticate(user=ceo)

        response = client.get('/api/v1/stocks/', {'status': 'CRITICAL'})

        assert [s['product'] for s in response.data['results']] == [low.pk]
        assert response.data['results'][0]['status'] == 'CRITICAL'

    def test_malformed_branch_filter_is_ignored(self, client, ceo, branch, product, add_stock):
        add_stock(branch, product, 3)
        client.force_authenticate(user=ceo)

        response = client.get('/api/v1/stocks/', {'branch': 'abc'})

        assert response.status_code == 200
        assert response.data['count'] == 1

    def test_history(self, client, ceo, branch, product, add_stock):
        for _ in range(6):
            add_stock(branch, product, 1)
        from apps.inventory.models import ProductStock
        stock = ProductStock.objects.get()
        client.force_authenticate(user=ceo)

        response = client.get(f'/api/v1/stocks/{stock.pk}/history/', {'page': 2, 'start': 'bad-date'})

        assert response.status_code == 200
        assert response.data['count'] == 6
        assert response.data['page'] == 2
        assert len(response.data['results']) == 1

    def test_adjust(self, client, warehouse, product):
        client.force_authenticate(user=warehouse)
        response = client.post('/api/v1/stocks/adjust/', {
            'product_id': product.pk, 'quantity': '5', 'movement_type': 'INGRESO', 'reason': 'Inventario'
        }, format='json')

        assert response.status_code == 200
        assert response.data == {'success': True, 'message': "Ajuste registrado correctamente."}

    def test_adjust_denied_for_requester(self, client, requester, product):
        client.force_authenticate(user=requester)
        response = client.post('/api/v1/stocks/adjust/', {
            'product_id': product.pk, 'quantity': '5', 'movement_type': 'INGRESO', 'reason': 'Inventario'
        }, format='json')
        assert response.status_code == 403


@pytest.mark.django_db
class TestPurchaseRequestAPI:
    def test_ceo_approves(self, client, ceo):
        purchase = PurchaseRequestFactory()
        client.force_authenticate(user=ceo)

        response = client.post(f'/api/v1/purchase-requests/{purchase.pk}/approve/', {'comment': 'OK'}, format='json')

        assert response.status_code == 200
        assert response.data['success'] is True
        purchase.refresh_from_db()
        assert purchase.status == RequestStatus.APPROVED

    def test_accountant_cannot_reject(self, client, accountant):
        purchase = PurchaseRequestFactory()
        client.force_authenticate(user=accountant)

        response = client.post(f'/api/v1/purchase-requests/{purchase.pk}/reject/', {'reason': 'No procede'},
                               format='json')

        assert response.status_code == 403
        purchase.refresh_from_db()
        assert purchase.status == RequestStatus.PENDING

    def test_short_reason_returns_400(self, client, ceo):
        purchase = PurchaseRequestFactory()
        client.force_authenticate(user=ceo)
        response = client.post(f'/api/v1/purchase-requests/{purchase.pk}/reject/', {'reason': 'no'}, format='json')
        assert response.status_code == 400
        assert response.data['success'] is False

    def test_requester_lists_own_requests(self, client, requester):
        own = PurchaseRequestFactory(requester=requester)
        PurchaseRequestFactory()
        client.force_authenticate(user=requester)

        response = client.get('/api/v1/purchase-requests/')

        assert [r['id'] for r in response.data['results']] == [own.pk]
        assert response.data['results'][0]['number'] == own.number

    def test_hidden_request_is_404(self, client, requester):
        other = PurchaseRequestFactory()
        client.force_authenticate(user=requester)
        assert client.get(f'/api/v1/purchase-requests/{other.pk}/').status_code == 404

    def test_detail_includes_documents(self, client, accountant):
        purchase = PurchaseRequestFactory()
        client.force_authenticate(user=accountant)

        response = client.get(f'/api/v1/purchase-requests/{purchase.pk}/')

        assert response.status_code == 200
        assert response.data['quotations'] == []
        assert response.data['invoices'] == []
