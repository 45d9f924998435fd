from django.db import models


class SiteHero(models.Model):
    """Homepage hero banner (single row)"""
    BACKGROUND_TYPE_CHOICES = [
        ('image', 'Image'),
        ('video', 'Video'),
    ]

    title = models.CharField(max_length=255, blank=True, null=True)
    title_vi = models.CharField(max_length=255, blank=True, null=True)
    subtitle = models.TextField(blank=True, null=True)
    subtitle_vi = models.TextField(blank=True, null=True)
    button_text = models.CharField(max_length=100, blank=True, null=True)
    button_text_vi = models.CharField(max_length=100, blank=True, null=True)
    button_link = models.CharField(max_length=500, blank=True, null=True)
    background_type = models.CharField(max_length=10, choices=BACKGROUND_TYPE_CHOICES, default='image')
    background_image = models.ForeignKey('media.Asset', on_delete=models.PROTECT, null=True, blank=True, related_name='+')
    background_video = models.ForeignKey('media.Asset', on_delete=models.PROTECT, null=True, blank=True, related_name='+')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'site_heros'


class SiteIntro(models.Model):
    """Homepage introduction block (single row)"""
    title = models.CharField(max_length=255)
    title_vi = models.CharField(max_length=255, blank=True, null=True)
    subtitle = models.TextField(blank=True, null=True)
    subtitle_vi = models.TextField(blank=True, null=True)
    content_html = models.TextField(blank=True, default='')
    content_html_vi = models.TextField(blank=True, null=True)
    intro_image = models.ForeignKey('media.Asset', on_delete=models.PROTECT, null=True, blank=True, related_name='+')
    background_image = models.ForeignKey('media.Asset', on_delete=models.PROTECT, null=True, blank=True, related_name='+')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'site_intros'


class SiteFooter(models.Model):
    """Footer text and map (single row)"""
    intro = models.TextField(blank=True, default='')
    intro_vi = models.TextField(blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    description_vi = models.TextField(blank=True, null=True)
    map_embed_url = models.TextField(blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'site_footer'


class FooterAddress(models.Model):
    label = models.CharField(max_length=255)
    label_vi = models.CharField(max_length=255, blank=True, null=True)
    address = models.TextField()
    address_vi = models.TextField(blank=True, null=True)
    position = models.IntegerField(default=0)

    class Meta:
        db_table = 'footer_addresses'
        ordering = ['position']


class FooterContact(models.Model):
    TYPE_CHOICES = [
        ('phone', 'Phone'),
        ('email', 'Email'),
    ]

    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    label = models.CharField(max_length=255, blank=True, null=True)
    label_vi = models.CharField(max_length=255, blank=True, null=True)
    value = models.CharField(max_length=255)
    position = models.IntegerField(default=0)

    class Meta:
        db_table = 'footer_contacts'
        ordering = ['position']


class FooterSocialLink(models.Model):
    PLATFORM_CHOICES = [
        ('facebook', 'Facebook'),
        ('instagram', 'Instagram'),
        ('youtube', 'YouTube'),
        ('zalo', 'Zalo'),
        ('tiktok', 'TikTok'),
        ('linkedin', 'LinkedIn'),
        ('twitter', 'Twitter'),
    ]

    platform = models.CharField(max_length=20, choices=PLATFORM_CHOICES)
    url = models.CharField(max_length=500)
    is_active = models.BooleanField(default=True)
    position = models.IntegerField(default=0)

    class Meta:
        db_table = 'footer_social_links'
        ordering = ['position']


class SiteContact(models.Model):
    """Floating contact buttons shown on every storefront page"""
    TYPE_CHOICES = [
        ('phone', 'Phone'),
        ('zalo', 'Zalo'),
        ('facebook', 'Facebook'),
        ('messenger', 'Messenger'),
        ('email', 'Email'),
        ('whatsapp', 'WhatsApp'),
    ]

    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    label = models.CharField(max_length=255, blank=True, null=True)
    value = models.CharField(max_length=500)
    is_active = models.BooleanField(default=True)
    position = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'site_contacts'
        ordering = ['position']


class FeaturedCatalogRow(models.Model):
    """A row of 1-4 catalogs in the homepage featured layout"""
    position = models.IntegerField(default=0)
    columns = models.PositiveSmallIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'featured_catalog_rows'
        ordering = ['position']


class FeaturedCatalogRowItem(models.Model):
    row = models.ForeignKey(FeaturedCatalogRow, on_delete=models.CASCADE, related_name='items')
    catalog = models.ForeignKey('catalog.Catalog', on_delete=models.CASCADE, related_name='featured_items')
    position = models.IntegerField(default=0)

    class Meta:
        db_table = 'featured_catalog_row_items'
        ordering = ['position']


class SaleSectionSettings(models.Model):
    """Homepage sale section heading (single row)"""
    title = models.CharField(max_length=255, default='SALE')
    title_vi = models.CharField(max_length=255, blank=True, null=True)
    is_active = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'sale_section_settings'


class HomepageSaleProduct(models.Model):
    """Product shown in the homepage sale section. Kept in sync with discount_price."""
    product = models.OneToOneField('catalog.Product', on_delete=models.CASCADE, related_name='sale_entry')
    position = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'homepage_sale_products'
        ordering = ['position']


class NavMenuItem(models.Model):
    """Top navigation entry pointing at a catalog, subcatalog or service"""
    ITEM_TYPE_CHOICES = [
        ('catalog', 'Catalog'),
        ('subcatalog', 'Subcatalog'),
        ('service', 'Service'),
    ]

    item_type = models.CharField(max_length=20, choices=ITEM_TYPE_CHOICES)
    catalog = models.ForeignKey('catalog.Catalog', on_delete=models.CASCADE, null=True, blank=True, related_name='menu_items')
    service = models.ForeignKey('content.Service', on_delete=models.CASCADE, null=True, blank=True, related_name='menu_items')
    position = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'nav_menu_items'
        ordering = ['position']
