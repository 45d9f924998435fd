"""
URL configuration for the admin deployment (APP_ROLE=admin).

Everything under api/v1/ requires a JWT bearer token except the login and
refresh endpoints.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.views.static import serve

admin.site.site_header = "Homestore Admin Panel"
admin.site.site_title = "Homestore Admin Portal"
admin.site.index_title = "Welcome to the Homestore Admin Portal"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('homestore.core.urls')),
    path('api/v1/', include('homestore.media.urls')),
    path('api/v1/', include('homestore.catalog.urls')),
    path('api/v1/', include('homestore.content.urls')),
    path('api/v1/', include('homestore.homepage.urls')),
    re_path(r'^media/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
    re_path(r'^static/(?P<path>.*)$', serve, {'document_root': settings.STATIC_ROOT}),
]
