"""Asset upload, delete and watermark operations"""
import logging
import os

from django.db import transaction

from homestore.core.exceptions import DomainError
from homestore.core.revalidation import schedule_revalidation, TAG_SETTINGS
from homestore.core.utils import delete_instance
from .models import Asset
from .overlay import get_overlay_settings, save_overlay_settings, watermark_image_bytes, fetch_bytes, OverlayError
from .storage import upload_file, delete_file, StorageError

logger = logging.getLogger(__name__)

WATERMARK_FOLDER = 'watermarked'


def _jpeg_filename(filename):
    stem, _ = os.path.splitext(os.path.basename(filename))
    return f'{stem}.jpg'


def create_asset(data, filename, content_type=None, folder=None, alt_text=None, apply_overlay=False):
    """Store the bytes and record an Asset row"""
    if apply_overlay and content_type and content_type.startswith('image/'):
        try:
            data, processed = watermark_image_bytes(data)
        except OverlayError as e:
            raise DomainError(str(e))
        if processed:
            filename = _jpeg_filename(filename)
            content_type = 'image/jpeg'

    try:
        url = upload_file(data, filename, content_type=content_type, folder=folder)
    except StorageError as e:
        raise DomainError(str(e), status_code=502)

    asset = Asset.objects.create(
        url=url,
        filename=filename,
        mime_type=content_type,
        size=len(data),
        alt_text=alt_text or None,
    )
    logger.info(f"Created asset {asset.pk} ({filename})")
    return asset


def delete_asset(asset):
    """Delete the row first so a blocking reference leaves the stored file alone"""
    url = asset.url
    delete_instance(asset, 'asset')
    delete_file(url)


def watermark_asset(asset):
    """
    Produce a watermarked copy of an image asset under ``watermarked/``.
    Returns (asset, processed); the original asset is returned unchanged
    when the overlay is disabled.
    """
    if not asset.is_image:
        raise DomainError('Only images can be watermarked.')

    overlay_settings = get_overlay_settings()
    if not overlay_settings.get('enabled') or not overlay_settings.get('logo_url'):
        return asset, False

    try:
        original = fetch_bytes(asset.url)
    except Exception as e:
        logger.error(f"Failed to fetch image for asset {asset.pk}: {str(e)}")
        raise DomainError('Failed to fetch original image', status_code=502)

    try:
        data, processed = watermark_image_bytes(original, overlay_settings)
    except OverlayError as e:
        raise DomainError(str(e))
    if not processed:
        return asset, False

    watermarked = create_asset(
        data,
        _jpeg_filename(asset.filename),
        content_type='image/jpeg',
        folder=WATERMARK_FOLDER,
        alt_text=asset.alt_text,
    )
    return watermarked, True


def update_overlay_settings(values, invalidator=None):
    values = dict(values)
    if 'logo_asset_id' in values:
        logo_id = values['logo_asset_id']
        logo = Asset.objects.filter(pk=logo_id).first() if logo_id else None
        values['logo_url'] = logo.url if logo else None
        values['logo_asset_id'] = logo.pk if logo else None
    with transaction.atomic():
        merged = save_overlay_settings(values)
        schedule_revalidation([TAG_SETTINGS], invalidator)
    return merged


def get_asset_or_error(asset_id, label='Image'):
    if not asset_id:
        return None
    asset = Asset.objects.filter(pk=asset_id).first()
    if asset is None:
        raise DomainError(f'{label} not found.')
    return asset


def gallery_items(images):
    """
    Normalize gallery input: drop repeated assets and flag exactly one
    primary image (the first flagged one, else the first). Returns
    (items, assets_by_id).
    """
    items = []
    seen = set()
    for image in images or []:
        if image['asset_id'] in seen:
            continue
        seen.add(image['asset_id'])
        items.append(dict(image))

    assets = Asset.objects.in_bulk(list(seen))
    if len(assets) != len(seen):
        raise DomainError('One or more images were not found.')

    primary = next((index for index, item in enumerate(items) if item.get('is_primary')), 0)
    for index, item in enumerate(items):
        item['is_primary'] = index == primary
    return items, assets
