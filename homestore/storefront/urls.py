from django.urls import path
from . import views

urlpatterns = [
    path('revalidate/', views.revalidate, name='storefront-revalidate'),
    path('home/', views.home, name='storefront-home'),
    path('menu/', views.menu, name='storefront-menu'),
    path('footer/', views.footer, name='storefront-footer'),
    path('contacts/', views.contacts, name='storefront-contacts'),
    path('catalog/<slug:slug>/', views.catalog_page, name='storefront-catalog'),
    path('product/<slug:slug>/', views.product_page, name='storefront-product'),
    path('sale/', views.sale_page, name='storefront-sale'),
    path('collections/', views.collections, name='storefront-collections'),
    path('services/<slug:slug>/', views.service_page, name='storefront-service'),
    path('projects/', views.projects, name='storefront-projects'),
    path('projects/<slug:slug>/', views.project_page, name='storefront-project'),
    path('blogs/', views.blogs, name='storefront-blogs'),
    path('blogs/<slug:slug>/', views.blog_page, name='storefront-blog'),
    path('search/', views.search, name='storefront-search'),
    path('contact/', views.contact, name='storefront-contact'),
    path('subscribe/', views.subscribe, name='storefront-subscribe'),
]
