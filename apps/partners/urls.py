from django.urls import path

from . import views

app_name = 'partners'

urlpatterns = [
    path('providers/', views.provider_list, name='provider_list'),
    path('providers/add/', views.provider_create, name='provider_create'),
    path('providers/<int:pk>/edit/', views.provider_edit, name='provider_edit'),
    path('api/providers/search/', views.provider_search_api, name='provider_search_api'),
]
