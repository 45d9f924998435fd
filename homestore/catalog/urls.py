from django.urls import path
from . import views

urlpatterns = [
    path('catalogs/', views.catalog_list_create, name='catalog-list-create'),
    path('catalogs/bulk-delete/', views.catalog_bulk_delete, name='catalog-bulk-delete'),
    path('catalogs/<int:pk>/', views.catalog_detail, name='catalog-detail'),
    path('catalogs/<int:pk>/toggle-home/', views.catalog_toggle_home, name='catalog-toggle-home'),
    path('products/', views.product_list_create, name='product-list-create'),
    path('products/bulk-delete/', views.product_bulk_delete, name='product-bulk-delete'),
    path('products/import/', views.product_import_upload, name='product-import-upload'),
    path('products/import/template/', views.product_import_template, name='product-import-template'),
    path('products/import/<int:pk>/', views.product_import_status, name='product-import-status'),
    path('products/<int:pk>/', views.product_detail, name='product-detail'),
    path('products/<int:pk>/recommended/', views.product_recommended, name='product-recommended'),
    path('collections/', views.collection_list_create, name='collection-list-create'),
    path('collections/bulk-delete/', views.collection_bulk_delete, name='collection-bulk-delete'),
    path('collections/<int:pk>/', views.collection_detail, name='collection-detail'),
]
