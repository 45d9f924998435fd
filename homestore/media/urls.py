from django.urls import path
from . import views

urlpatterns = [
    path('assets/', views.asset_list, name='asset-list'),
    path('assets/upload/', views.asset_upload, name='asset-upload'),
    path('assets/<int:pk>/', views.asset_detail, name='asset-detail'),
    path('assets/process-logo-overlay/', views.process_logo_overlay, name='process-logo-overlay'),
    path('settings/logo-overlay/', views.logo_overlay_settings, name='logo-overlay-settings'),
]
