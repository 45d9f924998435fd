import django_filters
from django.db.models import Q
from .models import Catalog, Product, Collection


class CatalogFilter(django_filters.FilterSet):
    """Admin catalog list filters"""
    search = django_filters.CharFilter(method='filter_search', label='Search')
    level = django_filters.NumberFilter(field_name='level')
    parent = django_filters.NumberFilter(field_name='parent_id')
    show_on_home = django_filters.BooleanFilter(field_name='show_on_home')

    class Meta:
        model = Catalog
        fields = ['search', 'level', 'parent', 'show_on_home']

    def filter_search(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(name_vi__icontains=value) | Q(slug__icontains=value))


class ProductFilter(django_filters.FilterSet):
    """Admin product list filters"""
    search = django_filters.CharFilter(method='filter_search', label='Search')
    catalog = django_filters.NumberFilter(field_name='catalog_id')
    is_active = django_filters.BooleanFilter(field_name='is_active')
    on_sale = django_filters.BooleanFilter(method='filter_on_sale', label='On sale')

    class Meta:
        model = Product
        fields = ['search', 'catalog', 'is_active', 'on_sale']

    def filter_search(self, queryset, name, value):
        """Match name (both languages) or slug"""
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(name_vi__icontains=value) | Q(slug__icontains=value))

    def filter_on_sale(self, queryset, name, value):
        if value is None:
            return queryset
        return queryset.filter(discount_price__isnull=not value)


class CollectionFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search', label='Search')
    is_active = django_filters.BooleanFilter(field_name='is_active')

    class Meta:
        model = Collection
        fields = ['search', 'is_active']

    def filter_search(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(name_vi__icontains=value) | Q(slug__icontains=value))
