from django.contrib import admin
from .models import Catalog, Product, ProductAsset, Collection, RecommendedProduct, ProductImportJob


@admin.register(Catalog)
class CatalogAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'parent', 'level', 'show_on_home', 'display_order', 'created_at']
    list_filter = ['level', 'show_on_home', 'created_at']
    search_fields = ['name', 'name_vi', 'slug']
    ordering = ['level', 'display_order', 'name']
    readonly_fields = ['level', 'created_at', 'updated_at']


class ProductAssetInline(admin.TabularInline):
    model = ProductAsset
    extra = 0
    fields = ['asset', 'position', 'is_primary', 'aspect_ratio', 'object_fit']


class RecommendedProductInline(admin.TabularInline):
    model = RecommendedProduct
    fk_name = 'source_product'
    extra = 0


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'catalog', 'base_price', 'discount_price', 'is_active', 'created_at']
    list_filter = ['is_active', 'catalog', 'created_at']
    search_fields = ['name', 'name_vi', 'slug']
    ordering = ['name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ProductAssetInline, RecommendedProductInline]


@admin.register(Collection)
class CollectionAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'name_vi', 'slug']
    ordering = ['name']


@admin.register(ProductImportJob)
class ProductImportJobAdmin(admin.ModelAdmin):
    list_display = ['id', 'status', 'total_rows', 'success_count', 'error_count', 'created_by', 'created_at']
    list_filter = ['status', 'created_at']
    readonly_fields = ['errors', 'created_at', 'completed_at']
