"""
Product catalog service
"""
import logging

from django.db.models import Q

from apps.accounts.permissions import Capability
from apps.core.exceptions import InvalidInputError
from apps.core.services import ActionResult, service_action

from .models import Product

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 20


class ProductService:

    @staticmethod
    @service_action(Capability.CREATE_PRODUCT)
    def create_product(user, name, unit_measure, description=''):
        """
        Creates a product; the code PROD-000001 is derived from its id.

        Returns ActionResult with data['product'] = {id, name, code, unit_measure}.
        """
        name = (name or '').strip()
        unit_measure = (unit_measure or '').strip()
        if not name or not unit_measure:
            raise InvalidInputError('MISSING_FIELDS', "El nombre y la unidad son obligatorios.")

        product = Product.objects.create(
            name=name,
            unit_measure=unit_measure,
            description=(description or '').strip(),
            created_by=user,
        )
        logger.info(f"Producto {product.code} creado por {user.username}")

        return ActionResult.ok(
            f"Producto creado: {product.code}",
            product={
                'id': product.id,
                'name': product.name,
                'code': product.code,
                'unit_measure': product.unit_measure,
            }
        )

    @staticmethod
    def search(query, limit=SEARCH_LIMIT):
        """Active products whose name or code contains the query"""
        products = Product.objects.filter(is_active=True)
        query = (query or '').strip()
        if query:
            products = products.filter(Q(name__icontains=query) | Q(code__icontains=query))
        return products.order_by('name')[:limit]
