from django.urls import path

from . import views

app_name = 'products'

urlpatterns = [
    path('', views.product_list, name='product_list'),
    path('add/', views.product_create, name='product_create'),

    # API
    path('api/search/', views.product_search_api, name='product_search_api'),
]
