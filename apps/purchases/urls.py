from django.urls import path

from . import views

app_name = 'purchases'

urlpatterns = [
    path('requests/', views.request_list, name='request_list'),
    path('requests/add/', views.request_create, name='request_create'),
    path('requests/<int:pk>/', views.request_detail, name='request_detail'),
    path('requests/<int:pk>/edit/', views.request_edit, name='request_edit'),

    # Workflow
    path('requests/<int:pk>/approve/', views.request_approve, name='request_approve'),
    path('requests/<int:pk>/reject/', views.request_reject, name='request_reject'),
    path('requests/<int:pk>/complete/', views.request_complete, name='request_complete'),
    path('requests/<int:pk>/close/', views.request_close, name='request_close'),

    # Execution & reception
    path('requests/<int:pk>/execution/', views.execution_register, name='execution_register'),
    path('requests/<int:pk>/documents/<str:doc_type>/<int:doc_id>/validate/', views.document_validate, name='document_validate'),
    path('requests/<int:pk>/documents/<str:doc_type>/<int:doc_id>/delete/', views.document_delete, name='document_delete'),
    path('requests/<int:pk>/reception/', views.reception_register, name='reception_register'),

    # API
    path('api/requests/<int:pk>/invoices/', views.request_invoices_api, name='request_invoices_api'),
    path('api/lookups/', views.lookups_api, name='lookups_api'),
]
