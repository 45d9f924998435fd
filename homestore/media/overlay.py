"""
Logo overlay (watermark) for product images.

Settings live in the ``logo_overlay`` SiteSetting row. The logo is scaled
to a percentage of the base image width, faded by the configured opacity
and pasted in a corner (or the center) with padding. The result is always
a JPEG at quality 90.
"""
import io
import logging

import requests
from PIL import Image

from homestore.core.models import SiteSetting

logger = logging.getLogger(__name__)

SETTINGS_KEY = 'logo_overlay'

POSITION_CHOICES = ['top-left', 'top-right', 'bottom-left', 'bottom-right', 'center']

DEFAULT_SETTINGS = {
    'enabled': False,
    'logo_asset_id': None,
    'logo_url': None,
    'position': 'top-right',
    'size_percent': 15,
    'opacity': 80,
    'padding': 20,
}

JPEG_QUALITY = 90
FETCH_TIMEOUT = 10


class OverlayError(Exception):
    pass


def get_overlay_settings():
    """Stored settings merged over the defaults"""
    setting = SiteSetting.objects.filter(key=SETTINGS_KEY).first()
    merged = dict(DEFAULT_SETTINGS)
    if setting and isinstance(setting.value, dict):
        merged.update({k: v for k, v in setting.value.items() if k in DEFAULT_SETTINGS})
    return merged


def save_overlay_settings(values):
    merged = get_overlay_settings()
    merged.update({k: v for k, v in values.items() if k in DEFAULT_SETTINGS})
    SiteSetting.objects.update_or_create(key=SETTINGS_KEY, defaults={'value': merged})
    return merged


def compute_logo_position(position, base_size, logo_size, padding):
    """Top-left corner for the logo. Never negative."""
    base_width, base_height = base_size
    logo_width, logo_height = logo_size

    if position == 'top-left':
        left, top = padding, padding
    elif position == 'bottom-left':
        left, top = padding, base_height - logo_height - padding
    elif position == 'bottom-right':
        left, top = base_width - logo_width - padding, base_height - logo_height - padding
    elif position == 'center':
        left, top = round((base_width - logo_width) / 2), round((base_height - logo_height) / 2)
    else:
        # top-right is the default
        left, top = base_width - logo_width - padding, padding

    return max(0, left), max(0, top)


def apply_logo_overlay(image_bytes, logo_bytes, size_percent=15, opacity=80, position='top-right', padding=20):
    """Composite the logo onto the image and return JPEG bytes"""
    try:
        base = Image.open(io.BytesIO(image_bytes)).convert('RGB')
        logo = Image.open(io.BytesIO(logo_bytes)).convert('RGBA')
    except Exception as e:
        raise OverlayError(f'Could not read image: {str(e)}') from e

    logo_width = max(1, round(base.width * (size_percent / 100)))
    logo_height = max(1, round(logo.height * logo_width / logo.width))
    logo = logo.resize((logo_width, logo_height), Image.LANCZOS)

    if opacity < 100:
        factor = max(0, opacity) / 100
        alpha = logo.getchannel('A').point(lambda value: round(value * factor))
        logo.putalpha(alpha)

    left, top = compute_logo_position(position, base.size, logo.size, padding)
    base.paste(logo, (left, top), logo)

    output = io.BytesIO()
    base.save(output, format='JPEG', quality=JPEG_QUALITY)
    return output.getvalue()


def fetch_bytes(url):
    response = requests.get(url, timeout=FETCH_TIMEOUT)
    response.raise_for_status()
    return response.content


def watermark_image_bytes(image_bytes, overlay_settings=None):
    """
    Apply the configured overlay to raw image bytes.
    Returns (bytes, processed). The original bytes come back untouched when
    the overlay is disabled or the logo cannot be fetched.
    """
    overlay_settings = overlay_settings or get_overlay_settings()
    if not overlay_settings.get('enabled') or not overlay_settings.get('logo_url'):
        return image_bytes, False

    try:
        logo_bytes = fetch_bytes(overlay_settings['logo_url'])
    except requests.RequestException as e:
        logger.warning(f"Failed to fetch overlay logo {overlay_settings['logo_url']}: {str(e)}")
        return image_bytes, False

    processed = apply_logo_overlay(
        image_bytes,
        logo_bytes,
        size_percent=overlay_settings['size_percent'],
        opacity=overlay_settings['opacity'],
        position=overlay_settings['position'],
        padding=overlay_settings['padding'],
    )
    return processed, True
