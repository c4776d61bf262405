from django.urls import path

from . import views

app_name = 'reports'

urlpatterns = [
    path('', views.dashboard, name='dashboard'),

    # Export endpoints
    path('export/', views.export_page, name='export_page'),
    path('export/stock/csv/', views.export_stock_csv, name='export_stock_csv'),
    path('export/stock/excel/', views.export_stock_excel, name='export_stock_excel'),
    path('export/movements/csv/', views.export_movements_csv, name='export_movements_csv'),
]
