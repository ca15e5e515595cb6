from django.urls import path
from . import views

app_name = 'leads'

urlpatterns = [
    path('', views.lead_list_view, name='lead_list'),
    path('kanban/', views.lead_kanban_view, name='lead_kanban'),
    path('create/', views.lead_create_view, name='lead_create'),
    path('auto-assign/', views.lead_auto_assign_view, name='lead_auto_assign'),
    path('export/', views.lead_export_view, name='lead_export'),
    path('<int:pk>/', views.lead_detail_view, name='lead_detail'),
    path('<int:pk>/edit/', views.lead_edit_view, name='lead_edit'),
    path('<int:pk>/delete/', views.lead_delete_view, name='lead_delete'),
    path('<int:pk>/assign/', views.lead_assign_view, name='lead_assign'),
    path('<int:pk>/change-status/', views.lead_change_status_view, name='lead_change_status'),
]
