from django.urls import path
from . import views

app_name = 'invoices'

urlpatterns = [
    # Packages
    path('packages/', views.package_list_view, name='package_list'),
    path('packages/create/', views.package_create_view, name='package_create'),
    path('packages/<int:pk>/edit/', views.package_edit_view, name='package_edit'),
    path('packages/<int:pk>/toggle/', views.package_toggle_view, name='package_toggle'),

    # Invoices
    path('', views.invoice_list_view, name='invoice_list'),
    path('create/', views.invoice_create_view, name='invoice_create'),
    path('export/', views.invoice_export_view, name='invoice_export'),
    path('<int:pk>/', views.invoice_detail_view, name='invoice_detail'),
    path('<int:pk>/print/', views.invoice_print_view, name='invoice_print'),
    path('<int:pk>/delete/', views.invoice_delete_view, name='invoice_delete'),
]
