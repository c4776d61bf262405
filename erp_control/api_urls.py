from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
)

from apps.inventory.api_views import ProductStockViewSet
from apps.products.api_views import ProductViewSet
from apps.purchases.api_views import PurchaseRequestViewSet

router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='api-product')
router.register(r'stocks', ProductStockViewSet, basename='api-stock')
router.register(r'purchase-requests', PurchaseRequestViewSet, basename='api-purchase-request')

urlpatterns = [
    # Auth
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Generic Router
    path('', include(router.urls)),
]
