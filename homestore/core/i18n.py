"""Locale helpers for the EN/VI storefront"""
from django.conf import settings

LOCALES = ('en', 'vi')
DEFAULT_LOCALE = 'vi'


def normalize_locale(value):
    if value and value.lower() in LOCALES:
        return value.lower()
    return DEFAULT_LOCALE


def get_request_locale(request):
    """Locale from ?locale=, then the locale cookie, then the default"""
    cookie_name = getattr(settings, 'LOCALE_COOKIE_NAME', 'locale')
    value = request.query_params.get('locale') if hasattr(request, 'query_params') else request.GET.get('locale')
    if not value:
        value = request.COOKIES.get(cookie_name)
    return normalize_locale(value)


def get_localized_text(obj, field, locale):
    """
    Return ``<field>_vi`` for the Vietnamese locale when it has content,
    the base field otherwise. Works on model instances and dicts.
    """
    def read(name):
        if isinstance(obj, dict):
            return obj.get(name)
        return getattr(obj, name, None)

    if locale == 'vi':
        value = read(f'{field}_vi')
        if value and str(value).strip():
            return value
    return read(field)
