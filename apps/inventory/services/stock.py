"""
Stock ledger service.

Every stock change writes one InventoryMovement and updates the locked
ProductStock row inside the caller's transaction.
"""
import logging
from decimal import Decimal

from django.core.paginator import Paginator
from django.db.models import Q
from django.utils import timezone

from apps.accounts.permissions import Capability, get_profile, has_capability
from apps.branches.models import Branch
from apps.core.exceptions import BusinessRuleError, InvalidInputError, PermissionDeniedError
from apps.core.services import ActionResult, optional_id, parse_decimal, parse_id, parse_positive, service_action
from apps.products.models import Product

from ..models import InventoryMovement, MovementConcept, MovementType, ProductStock

logger = logging.getLogger(__name__)

HISTORY_PAGE_SIZE = 5


class StockService:

    @staticmethod
    def apply_movement(
        *,
        user,
        branch,
        product,
        movement_type,
        concept,
        quantity,
        reason='',
        request=None,
        invoice=None,
        document_number='',
        document_file=None,
        unit_measure=None,
        timestamp=None,
    ):
        """
        Records a movement and updates stock. Must run inside transaction.atomic().

        Raises:
            InvalidInputError: quantity <= 0 or unknown movement type
            BusinessRuleError: SALIDA without stock row or with insufficient stock
        """
        quantity = parse_positive(quantity)
        if movement_type not in MovementType.values:
            raise InvalidInputError('INVALID_INPUT', "Tipo de movimiento inválido.")

        stock = (
            ProductStock.objects
            .select_for_update()
            .filter(branch=branch, product=product)
            .first()
        )

        if movement_type == MovementType.OUT:
            if stock is None:
                raise BusinessRuleError('NO_STOCK')
            if stock.stock_current < quantity:
                raise BusinessRuleError(
                    'INSUFFICIENT_STOCK',
                    f"Stock insuficiente (Actual: {stock.stock_current.normalize():f}).",
                    available=stock.stock_current,
                    requested=quantity,
                )
            new_stock = stock.stock_current - quantity
        else:
            if stock is None:
                stock = ProductStock(branch=branch, product=product, stock_current=Decimal('0'))
            new_stock = stock.stock_current + quantity

        stock.stock_current = new_stock
        stock._allow_stock_change = True
        stock.save()

        movement = InventoryMovement(
            branch=branch,
            product=product,
            user=user,
            type=movement_type,
            concept=concept,
            quantity=quantity,
            unit_measure=unit_measure or product.unit_measure,
            balance_after=new_stock,
            request=request,
            invoice=invoice,
            document_number=document_number or '',
            reason=reason or '',
            created_at=timestamp or timezone.now(),
        )
        if document_file:
            # Already stored name: shared by every line of the same guide
            movement.document_file = str(document_file)
        movement.save()

        logger.info(
            f"Movimiento {movement_type}/{concept} {quantity} x {product.code} "
            f"en {branch.code} (saldo {new_stock})"
        )
        return movement

    @staticmethod
    @service_action(Capability.ADJUST_STOCK)
    def register_adjustment(user, product_id, quantity, movement_type, reason, branch_id=None):
        """
        Manual stock adjustment (AJUSTE).

        Roles with ADJUST_ANY_BRANCH must choose the branch; store roles always
        use the branch of their profile.
        """
        reason = (reason or '').strip()
        if not product_id or not quantity or not movement_type or not reason:
            raise InvalidInputError('MISSING_FIELDS', "Todos los campos son obligatorios.")

        if has_capability(user, Capability.ADJUST_ANY_BRANCH):
            if not branch_id:
                raise InvalidInputError('MISSING_FIELDS', "Debes seleccionar una sucursal.")
            branch = Branch.objects.filter(pk=parse_id(branch_id, message="Sucursal inválida.")).first()
        else:
            profile = get_profile(user)
            branch = profile.branch if profile else None
            if branch is None:
                raise BusinessRuleError('NOT_FOUND', "⛔ No tienes una sucursal asignada en tu sesión.")

        if branch is None:
            raise BusinessRuleError('NOT_FOUND', "Sucursal no encontrada.")

        product = Product.objects.filter(pk=parse_id(product_id, message="Producto inválido.")).first()
        if product is None:
            raise BusinessRuleError('NOT_FOUND', "Producto no encontrado.")

        StockService.apply_movement(
            user=user,
            branch=branch,
            product=product,
            movement_type=movement_type,
            concept=MovementConcept.ADJUSTMENT,
            quantity=quantity,
            reason=reason,
        )
        return ActionResult.ok("Ajuste registrado correctamente.")

    @staticmethod
    @service_action(Capability.MANAGE_STOCK_LEVELS)
    def update_thresholds(user, stock_id, min_stock, reorder_point):
        """Updates min_stock / reorder_point of a stock row"""
        min_stock = parse_decimal(min_stock, 'INVALID_INPUT', "Valores de stock inválidos.")
        reorder_point = parse_decimal(reorder_point, 'INVALID_INPUT', "Valores de stock inválidos.")
        if min_stock < 0 or reorder_point < 0:
            raise InvalidInputError('INVALID_INPUT', "Los umbrales no pueden ser negativos.")

        stock = ProductStock.objects.select_for_update().filter(pk=parse_id(stock_id)).first()
        if stock is None:
            raise BusinessRuleError('NOT_FOUND', "Registro de stock no encontrado.")

        if not has_capability(user, Capability.ADJUST_ANY_BRANCH):
            profile = get_profile(user)
            if profile is None or profile.branch_id != stock.branch_id:
                raise PermissionDeniedError('PERMISSION_DENIED', "Solo puedes modificar el stock de tu sucursal.")

        stock.min_stock = min_stock
        stock.reorder_point = reorder_point
        stock.save(update_fields=['min_stock', 'reorder_point', 'last_update'])
        return ActionResult.ok("Umbrales actualizados.")

    @staticmethod
    def stock_overview(user, query='', branch_id=None, status=None):
        """
        Stock rows of active products with status annotation, critical first.
        Users bound to a branch only see their own branch.
        """
        stocks = (
            ProductStock.objects
            .select_related('branch', 'product')
            .filter(product__is_active=True)
            .critical_first()
        )

        if not (has_capability(user, Capability.VIEW_ALL_REQUESTS) or has_capability(user, Capability.ADJUST_ANY_BRANCH)):
            profile = get_profile(user)
            branch_id = profile.branch_id if profile else None
            if branch_id is None:
                return stocks.none()

        query = (query or '').strip()
        if query:
            stocks = stocks.filter(Q(product__name__icontains=query) | Q(product__code__icontains=query))
        branch_id = optional_id(branch_id)
        if branch_id is not None:
            stocks = stocks.filter(branch_id=branch_id)
        if status:
            stocks = stocks.filter(status_code=status)
        return stocks

    @staticmethod
    def product_history(branch_id, product_id, page=1, per_page=HISTORY_PAGE_SIZE, start_date=None, end_date=None):
        """
        Movements of a product in a branch, newest first, paginated.
        Date bounds are inclusive whole days.
        """
        movements = (
            InventoryMovement.objects
            .filter(branch_id=branch_id, product_id=product_id)
            .select_related('user', 'request', 'invoice', 'invoice__provider')
            .order_by('-created_at', '-id')
        )
        if start_date:
            movements = movements.filter(created_at__date__gte=start_date)
        if end_date:
            movements = movements.filter(created_at__date__lte=end_date)

        return Paginator(movements, per_page).get_page(page)
