from django.urls import path
from . import views

app_name = 'sales'

urlpatterns = [
    path('', views.sales_person_list_view, name='list'),
    path('create/', views.sales_person_create_view, name='create'),
    path('<int:pk>/edit/', views.sales_person_edit_view, name='edit'),
    path('<int:pk>/delete/', views.sales_person_delete_view, name='delete'),
    path('profile/', views.profile_view, name='profile'),
    path('dashboard/', views.sales_dashboard_view, name='dashboard'),
]
