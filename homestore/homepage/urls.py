from django.urls import path
from . import views

urlpatterns = [
    path('homepage/hero/', views.hero, name='homepage-hero'),
    path('homepage/intro/', views.intro, name='homepage-intro'),
    path('homepage/footer/', views.footer, name='homepage-footer'),
    path('homepage/contacts/', views.site_contacts, name='homepage-contacts'),
    path('homepage/menu/', views.nav_menu, name='homepage-menu'),
    path('homepage/featured/', views.featured_layout, name='homepage-featured'),
    path('homepage/sale/settings/', views.sale_settings, name='sale-settings'),
    path('homepage/sale/products/', views.sale_products, name='sale-products'),
    path('homepage/sale/products/reorder/', views.sale_products_reorder, name='sale-products-reorder'),
    path('homepage/sale/products/eligible/', views.sale_eligible_products, name='sale-products-eligible'),
    path('homepage/sale/products/<int:product_id>/', views.sale_product_remove, name='sale-product-remove'),
]
