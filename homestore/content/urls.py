from django.urls import path
from . import views

urlpatterns = [
    path('services/', views.service_list_create, name='service-list-create'),
    path('services/bulk-delete/', views.service_bulk_delete, name='service-bulk-delete'),
    path('services/<int:pk>/', views.service_detail, name='service-detail'),
    path('projects/', views.project_list_create, name='project-list-create'),
    path('projects/bulk-delete/', views.project_bulk_delete, name='project-bulk-delete'),
    path('projects/<int:pk>/', views.project_detail, name='project-detail'),
    path('posts/', views.post_list_create, name='post-list-create'),
    path('posts/bulk-delete/', views.post_bulk_delete, name='post-bulk-delete'),
    path('posts/<int:pk>/', views.post_detail, name='post-detail'),
]
