from django.contrib import admin
from .models import Service, ServiceAsset, Project, ProjectAsset, Post, PostAsset


class ServiceAssetInline(admin.TabularInline):
    model = ServiceAsset
    extra = 0


class ProjectAssetInline(admin.TabularInline):
    model = ProjectAsset
    extra = 0


class PostAssetInline(admin.TabularInline):
    model = PostAsset
    extra = 0


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ['title', 'slug', 'is_active', 'updated_at']
    list_filter = ['is_active']
    search_fields = ['title', 'title_vi', 'slug']
    inlines = [ServiceAssetInline]


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['title', 'slug', 'is_active', 'updated_at']
    list_filter = ['is_active']
    search_fields = ['title', 'title_vi', 'slug']
    inlines = [ProjectAssetInline]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ['title', 'slug', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['title', 'title_vi', 'slug']
    inlines = [PostAssetInline]
