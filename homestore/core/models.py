from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Admin dashboard user"""
    ROLE_CHOICES = [
        ('admin', 'Admin'),
        ('editor', 'Editor'),
    ]

    name = models.CharField(max_length=200, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='editor')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def is_admin_role(self):
        return self.role == 'admin' or self.is_superuser

    class Meta:
        db_table = 'users'


class SiteSetting(models.Model):
    """Key/value site configuration stored as JSON"""
    key = models.CharField(max_length=100, primary_key=True)
    value = models.JSONField(default=dict)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.key

    class Meta:
        db_table = 'site_settings'


class Notification(models.Model):
    """Dashboard notification. A null recipient means broadcast to every user."""
    TYPE_CHOICES = [
        ('entity_created', 'Entity Created'),
        ('entity_updated', 'Entity Updated'),
        ('entity_deleted', 'Entity Deleted'),
        ('system', 'System'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, null=True, blank=True, related_name='notifications')
    creator = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_notifications')
    type = models.CharField(max_length=30, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255)
    message = models.TextField()
    link = models.CharField(max_length=500, blank=True, null=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='notifications_created_idx'),
            models.Index(fields=['is_read'], name='notifications_is_read_idx'),
        ]


class InboxMessage(models.Model):
    """Message submitted through the storefront contact or subscribe forms"""
    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, null=True)
    phone_number = models.CharField(max_length=50)
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.name} ({self.phone_number})"

    class Meta:
        db_table = 'inbox_messages'
        ordering = ['-created_at']
