"""
URL configuration for the storefront deployment (APP_ROLE=storefront).

Public, read-mostly API consumed by the shop front end.
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('homestore.storefront.urls')),
]
