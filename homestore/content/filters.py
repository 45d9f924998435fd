import django_filters
from django.db.models import Q
from .models import Service, Project, Post


class ContentFilter(django_filters.FilterSet):
    """Shared list filters for services, projects and posts"""
    search = django_filters.CharFilter(method='filter_search', label='Search')
    is_active = django_filters.BooleanFilter(field_name='is_active')

    def filter_search(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(Q(title__icontains=value) | Q(title_vi__icontains=value) | Q(slug__icontains=value))


class ServiceFilter(ContentFilter):
    class Meta:
        model = Service
        fields = ['search', 'is_active']


class ProjectFilter(ContentFilter):
    class Meta:
        model = Project
        fields = ['search', 'is_active']


class PostFilter(ContentFilter):
    class Meta:
        model = Post
        fields = ['search', 'is_active']
