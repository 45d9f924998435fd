from django.db import models


class Asset(models.Model):
    """Uploaded file stored in blob storage"""
    url = models.CharField(max_length=1000)
    filename = models.CharField(max_length=255)
    mime_type = models.CharField(max_length=100, blank=True, null=True)
    size = models.IntegerField(blank=True, null=True)  # bytes
    alt_text = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.filename

    @property
    def is_image(self):
        return bool(self.mime_type) and self.mime_type.startswith('image/')

    class Meta:
        db_table = 'assets'
        ordering = ['-created_at']
