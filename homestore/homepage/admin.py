from django.contrib import admin
from .models import (
    SiteHero, SiteIntro, SiteFooter, FooterAddress, FooterContact, FooterSocialLink, SiteContact,
    FeaturedCatalogRow, FeaturedCatalogRowItem, SaleSectionSettings, HomepageSaleProduct, NavMenuItem,
)


@admin.register(SiteHero)
class SiteHeroAdmin(admin.ModelAdmin):
    list_display = ['title', 'background_type', 'is_active', 'updated_at']


@admin.register(SiteIntro)
class SiteIntroAdmin(admin.ModelAdmin):
    list_display = ['title', 'is_active', 'updated_at']


@admin.register(SiteFooter)
class SiteFooterAdmin(admin.ModelAdmin):
    list_display = ['id', 'updated_at']


@admin.register(FooterAddress)
class FooterAddressAdmin(admin.ModelAdmin):
    list_display = ['label', 'address', 'position']


@admin.register(FooterContact)
class FooterContactAdmin(admin.ModelAdmin):
    list_display = ['type', 'label', 'value', 'position']


@admin.register(FooterSocialLink)
class FooterSocialLinkAdmin(admin.ModelAdmin):
    list_display = ['platform', 'url', 'is_active', 'position']


@admin.register(SiteContact)
class SiteContactAdmin(admin.ModelAdmin):
    list_display = ['type', 'label', 'value', 'is_active', 'position']
    list_filter = ['type', 'is_active']


class FeaturedCatalogRowItemInline(admin.TabularInline):
    model = FeaturedCatalogRowItem
    extra = 0


@admin.register(FeaturedCatalogRow)
class FeaturedCatalogRowAdmin(admin.ModelAdmin):
    list_display = ['position', 'columns']
    inlines = [FeaturedCatalogRowItemInline]


@admin.register(SaleSectionSettings)
class SaleSectionSettingsAdmin(admin.ModelAdmin):
    list_display = ['title', 'is_active', 'updated_at']


@admin.register(HomepageSaleProduct)
class HomepageSaleProductAdmin(admin.ModelAdmin):
    list_display = ['product', 'position', 'created_at']
    ordering = ['position']


@admin.register(NavMenuItem)
class NavMenuItemAdmin(admin.ModelAdmin):
    list_display = ['item_type', 'catalog', 'service', 'position', 'is_active']
    list_filter = ['item_type', 'is_active']
