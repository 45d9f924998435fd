from django.contrib import admin
from django.utils.safestring import mark_safe
from .models import Asset


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ['filename', 'mime_type', 'size', 'preview', 'created_at']
    list_filter = ['mime_type', 'created_at']
    search_fields = ['filename', 'alt_text']
    ordering = ['-created_at']
    readonly_fields = ['url', 'size', 'created_at', 'updated_at']

    def preview(self, obj):
        if obj.is_image:
            return mark_safe(f'<img src="{obj.url}" style="max-height: 40px;" />')
        return '-'
