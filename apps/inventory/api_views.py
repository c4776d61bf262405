from django.utils.dateparse import parse_date
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.accounts.permissions import Capability
from apps.core.api.views import BaseBranchViewSet
from apps.core.services import optional_id

from .models import ProductStock
from .serializers import AdjustmentSerializer, InventoryMovementSerializer, ProductStockSerializer
from .services import StockService


def _date_param(request, key):
    try:
        return parse_date(request.query_params.get(key) or '')
    except ValueError:
        return None


class ProductStockViewSet(BaseBranchViewSet):
    """
    API endpoint for stock per branch (critical rows first), the product
    history of a stock row and manual adjustments.
    """
    queryset = ProductStock.objects.select_related('branch', 'product').critical_first()
    serializer_class = ProductStockSerializer
    required_capabilities = {'adjust': Capability.ADJUST_STOCK}

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params
        if params.get('status'):
            queryset = queryset.filter(status_code=params['status'])
        branch_id = optional_id(params.get('branch'))
        if branch_id is not None:
            queryset = queryset.filter(branch_id=branch_id)
        return queryset

    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        stock = self.get_object()
        page_obj = StockService.product_history(
            stock.branch_id,
            stock.product_id,
            page=request.query_params.get('page', 1),
            start_date=_date_param(request, 'start'),
            end_date=_date_param(request, 'end'),
        )
        return Response({
            'count': page_obj.paginator.count,
            'num_pages': page_obj.paginator.num_pages,
            'page': page_obj.number,
            'results': InventoryMovementSerializer(page_obj.object_list, many=True).data,
        })

    @action(detail=False, methods=['post'])
    def adjust(self, request):
        serializer = AdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = StockService.register_adjustment(request.user, **serializer.validated_data)
        code = status.HTTP_200_OK if result else status.HTTP_400_BAD_REQUEST
        return Response(result.as_dict(), status=code)
