from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import Capability, HasCapability

from .serializers import (
    ApproveSerializer,
    CompleteSerializer,
    PurchaseRequestDetailSerializer,
    PurchaseRequestSerializer,
    RejectSerializer,
)
from .services import PurchaseRequestService


def _result_response(result):
    code = status.HTTP_200_OK if result else status.HTTP_400_BAD_REQUEST
    return Response(result.as_dict(), status=code)


class PurchaseRequestViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for purchase requests visible to the user, plus the
    workflow actions (approve, reject, complete, close).
    """
    serializer_class = PurchaseRequestSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {
        'approve': Capability.APPROVE_REQUEST,
        'reject': Capability.REJECT_REQUEST,
        'complete': Capability.COMPLETE_PURCHASE,
        'close': Capability.CLOSE_PURCHASE,
    }

    def get_queryset(self):
        params = self.request.query_params
        return PurchaseRequestService.list_requests_for(
            self.request.user,
            status=params.get('status'),
            query=params.get('q', ''),
        )

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return PurchaseRequestDetailSerializer
        return super().get_serializer_class()

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        purchase = self.get_object()
        serializer = ApproveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = PurchaseRequestService.approve_request(request.user, purchase.pk, **serializer.validated_data)
        return _result_response(result)

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        purchase = self.get_object()
        serializer = RejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = PurchaseRequestService.reject_request(request.user, purchase.pk, serializer.validated_data['reason'])
        return _result_response(result)

    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        purchase = self.get_object()
        serializer = CompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = PurchaseRequestService.complete_purchase(
            request.user, purchase.pk, purchased=serializer.validated_data['purchased']
        )
        return _result_response(result)

    @action(detail=True, methods=['post'])
    def close(self, request, pk=None):
        purchase = self.get_object()
        return _result_response(PurchaseRequestService.validate_purchase_order(request.user, purchase.pk))
