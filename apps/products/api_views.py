from django.db.models import Q
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import Capability, HasCapability

from .models import Product
from .serializers import ProductSerializer
from .services import ProductService


class ProductViewSet(mixins.CreateModelMixin, viewsets.ReadOnlyModelViewSet):
    """
    API endpoint to list, retrieve and create products.
    Creation goes through ProductService (code generation + role check).
    """
    queryset = Product.objects.select_related('created_by').order_by('name')
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {'create': Capability.CREATE_PRODUCT}

    def get_queryset(self):
        queryset = super().get_queryset()
        query = self.request.query_params.get('q')
        if query:
            queryset = queryset.filter(Q(name__icontains=query) | Q(code__icontains=query))
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ProductService.create_product(
            request.user,
            name=serializer.validated_data['name'],
            unit_measure=serializer.validated_data.get('unit_measure', ''),
            description=serializer.validated_data.get('description', ''),
        )
        if not result:
            return Response(result.as_dict(), status=status.HTTP_400_BAD_REQUEST)

        product = Product.objects.get(pk=result.data['product']['id'])
        return Response(self.get_serializer(product).data, status=status.HTTP_201_CREATED)
