"""
ERP URL Configuration
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path(settings.ADMIN_URL, admin.site.urls),

    # Session login/logout
    path('accounts/', include('apps.accounts.urls')),

    path('', RedirectView.as_view(pattern_name='reports:dashboard', permanent=False)),

    # App routes (authenticated)
    path('app/', include('apps.reports.urls')),
    path('clients/', include('apps.clients.urls')),
    path('products/', include('apps.products.urls')),
    path('inventory/', include('apps.inventory.urls')),
    path('partners/', include('apps.partners.urls')),
    path('purchases/', include('apps.purchases.urls')),

    # JSON API
    path('api/v1/', include('erp_control.api_urls')),
]

# Serve uploaded documents in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
