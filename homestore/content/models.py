from django.conf import settings
from django.db import models


class SeoFields(models.Model):
    """SEO metadata shared by services, projects and posts"""
    seo_title = models.CharField(max_length=255, blank=True, null=True)
    seo_title_vi = models.CharField(max_length=255, blank=True, null=True)
    seo_description = models.TextField(blank=True, null=True)
    seo_description_vi = models.TextField(blank=True, null=True)
    seo_keywords = models.TextField(blank=True, null=True)
    seo_keywords_vi = models.TextField(blank=True, null=True)

    class Meta:
        abstract = True


class GalleryItem(models.Model):
    position = models.IntegerField(default=0)
    is_primary = models.BooleanField(default=False)

    class Meta:
        abstract = True
        ordering = ['position']


class Service(SeoFields):
    """Service offered by the company (design, manufacturing, ...)"""
    title = models.CharField(max_length=255)
    title_vi = models.CharField(max_length=255, blank=True, null=True)
    slug = models.SlugField(max_length=255, unique=True)
    description_html = models.TextField(blank=True, default='')
    description_html_vi = models.TextField(blank=True, null=True)
    image = models.ForeignKey('media.Asset', on_delete=models.PROTECT, null=True, blank=True, related_name='service_images')
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'services'


class ServiceAsset(GalleryItem):
    service = models.ForeignKey(Service, on_delete=models.CASCADE, related_name='gallery')
    asset = models.ForeignKey('media.Asset', on_delete=models.CASCADE, related_name='service_gallery')

    class Meta(GalleryItem.Meta):
        db_table = 'service_assets'
        unique_together = [['service', 'asset']]


class Project(SeoFields):
    """Completed showcase project"""
    title = models.CharField(max_length=255)
    title_vi = models.CharField(max_length=255, blank=True, null=True)
    slug = models.SlugField(max_length=255, unique=True)
    content_html = models.TextField(blank=True, default='')
    content_html_vi = models.TextField(blank=True, null=True)
    image = models.ForeignKey('media.Asset', on_delete=models.PROTECT, null=True, blank=True, related_name='project_images')
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'projects'


class ProjectAsset(GalleryItem):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='gallery')
    asset = models.ForeignKey('media.Asset', on_delete=models.CASCADE, related_name='project_gallery')

    class Meta(GalleryItem.Meta):
        db_table = 'project_assets'
        unique_together = [['project', 'asset']]


class Post(SeoFields):
    """Blog post"""
    title = models.CharField(max_length=255)
    title_vi = models.CharField(max_length=255, blank=True, null=True)
    slug = models.SlugField(max_length=255, unique=True)
    excerpt = models.TextField(blank=True, null=True)
    excerpt_vi = models.TextField(blank=True, null=True)
    content_html = models.TextField(blank=True, default='')
    content_html_vi = models.TextField(blank=True, null=True)
    featured_image = models.ForeignKey('media.Asset', on_delete=models.PROTECT, null=True, blank=True, related_name='post_images')
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'posts'


class PostAsset(GalleryItem):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name='gallery')
    asset = models.ForeignKey('media.Asset', on_delete=models.CASCADE, related_name='post_gallery')

    class Meta(GalleryItem.Meta):
        db_table = 'post_assets'
        unique_together = [['post', 'asset']]
