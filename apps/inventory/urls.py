from django.urls import path

from . import views

app_name = 'inventory'

urlpatterns = [
    path('stock/', views.stock_list, name='stock_list'),
    path('stock/<int:stock_id>/history/', views.product_history, name='product_history'),
    path('stock/<int:stock_id>/thresholds/', views.update_thresholds, name='update_thresholds'),
    path('adjustments/add/', views.manual_adjustment, name='manual_adjustment'),
    path('movements/', views.movement_list, name='movement_list'),
]
