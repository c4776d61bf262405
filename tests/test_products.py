import pytest

from apps.products.models import Product
from apps.products.services import ProductService
from tests.factories import ProductFactory


@pytest.mark.django_db
class TestProductService:
    def test_create_generates_code(self, logistics):
        result = ProductService.create_product(logistics, "  cable utp cat6 ", "MTR", "Rollo de 305 m")

        assert result.success
        product = Product.objects.get(pk=result.data['product']['id'])
        assert product.code == f"PROD-{product.pk:06d}"
        assert product.name == "CABLE UTP CAT6"
        assert product.created_by == logistics
        assert result.message == f"Producto creado: {product.code}"
        assert result.data['product']['code'] == product.code

    def test_missing_fields(self, logistics):
        result = ProductService.create_product(logistics, "Cable", "")
        assert not result.success
        assert result.code == 'MISSING_FIELDS'
        assert not Product.objects.exists()

    @pytest.mark.parametrize('role_fixture', ['requester', 'accountant', 'warehouse'])
    def test_roles_without_permission(self, request, role_fixture):
        user = request.getfixturevalue(role_fixture)
        result = ProductService.create_product(user, "Cable", "MTR")
        assert result.message == "⛔ No tienes permisos para crear productos."

    def test_anonymous_user(self):
        from django.contrib.auth.models import AnonymousUser

        result = ProductService.create_product(AnonymousUser(), "Cable", "MTR")
        assert result.message == "No autorizado"

    def test_search_by_name_or_code(self):
        paper = ProductFactory(name="Papel Bond")
        ProductFactory(name="Tóner HP")
        ProductFactory(name="Papel Kraft", is_active=False)

        assert list(ProductService.search("papel")) == [paper]
        assert list(ProductService.search(paper.code)) == [paper]
        assert ProductService.search("").count() == 2

    def test_codes_follow_ids(self):
        first, second = ProductFactory.create_batch(2)
        first.refresh_from_db()
        second.refresh_from_db()
        assert first.code == Product.build_code(first.pk)
        assert second.code == Product.build_code(second.pk)
