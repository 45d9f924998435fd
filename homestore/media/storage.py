"""
Blob storage for uploaded assets.

Production uploads go to Azure Blob Storage through a shared, thread-safe
BlobServiceClient. Without an Azure connection string the files are written
through Django's default storage (MEDIA_ROOT) so local development works
without cloud credentials.
"""
import logging
import os
import threading
from urllib.parse import quote, unquote, urlparse

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)

_blob_service_client = None
_blob_service_lock = threading.Lock()


class StorageError(Exception):
    pass


def _connection_string():
    return getattr(settings, 'AZURE_STORAGE_CONNECTION_STRING', os.getenv('AZURE_STORAGE_CONNECTION_STRING', ''))


def _container_name():
    return getattr(settings, 'AZURE_STORAGE_CONTAINER', os.getenv('AZURE_STORAGE_CONTAINER', 'assets'))


def is_azure_configured():
    return bool(_connection_string())


def get_blob_service_client():
    """Cached BlobServiceClient built from the connection string"""
    global _blob_service_client

    if _blob_service_client is not None:
        return _blob_service_client

    with _blob_service_lock:
        if _blob_service_client is not None:
            return _blob_service_client

        from azure.storage.blob import BlobServiceClient
        _blob_service_client = BlobServiceClient.from_connection_string(_connection_string())
        logger.debug("BlobServiceClient initialized from connection string")
        return _blob_service_client


def build_blob_name(filename, folder=None):
    filename = os.path.basename(filename or 'file')
    if folder:
        return f"{folder.strip('/')}/{filename}"
    return filename


def upload_file(data, filename, content_type=None, folder=None):
    """
    Store ``data`` (bytes) and return its public URL.
    Raises StorageError when the upload fails.
    """
    blob_name = build_blob_name(filename, folder)

    if not is_azure_configured():
        try:
            saved_name = default_storage.save(blob_name, ContentFile(data))
            return default_storage.url(saved_name)
        except Exception as e:
            logger.error(f"Failed to save {blob_name} to local storage: {str(e)}")
            raise StorageError('Failed to upload asset') from e

    try:
        from azure.storage.blob import ContentSettings
        blob_client = get_blob_service_client().get_blob_client(container=_container_name(), blob=blob_name)
        blob_client.upload_blob(
            data,
            overwrite=True,
            content_settings=ContentSettings(content_type=content_type or 'application/octet-stream'),
        )
        logger.info(f"Uploaded blob {blob_name} ({len(data)} bytes)")
        return blob_client.url
    except Exception as e:
        logger.error(f"Failed to upload blob {blob_name}: {str(e)}")
        raise StorageError('Failed to upload asset') from e


def blob_name_from_url(url):
    """Blob path inside the container for a URL produced by upload_file"""
    path = unquote(urlparse(url).path).lstrip('/')
    container = _container_name()
    if path.startswith(f'{container}/'):
        return path[len(container) + 1:]
    media_url = getattr(settings, 'MEDIA_URL', '/media/').lstrip('/')
    if media_url and path.startswith(media_url):
        return path[len(media_url):]
    return path


def delete_file(url):
    """Remove a stored file. Missing files are not an error."""
    blob_name = blob_name_from_url(url)
    try:
        if not is_azure_configured():
            if default_storage.exists(blob_name):
                default_storage.delete(blob_name)
            return True
        blob_client = get_blob_service_client().get_blob_client(container=_container_name(), blob=blob_name)
        blob_client.delete_blob()
        logger.info(f"Deleted blob {quote(blob_name)}")
        return True
    except Exception as e:
        logger.warning(f"Could not delete stored file {blob_name}: {str(e)}")
        return False
