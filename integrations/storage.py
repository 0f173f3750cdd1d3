# integrations/storage.py

import logging

import cloudinary.uploader

from core.exceptions import IntegrationError

logger = logging.getLogger(__name__)


def upload_one(file, folder, resource_type='auto'):
    """Upload one file to Cloudinary and return its secure URL."""
    try:
        result = cloudinary.uploader.upload(
            file,
            folder=folder,
            resource_type=resource_type,
            overwrite=False,
            unique_filename=True,
        )
    except Exception as exc:
        logger.error(
            f"Cloudinary upload failed: {exc}",
            extra={'folder': folder, 'file_name': getattr(file, 'name', None)},
        )
        raise IntegrationError('cloudinary', str(exc)) from exc

    url = result.get('secure_url')
    if not url:
        raise IntegrationError('cloudinary', 'Upload response has no secure_url')
    return url


def upload_many(files, folder):
    """Upload files in the given order. The returned URLs keep that order."""
    return [upload_one(file, folder) for file in files]
