import logging
import os
import secrets
import time

from flask import current_app
from werkzeug.utils import secure_filename

from flatdesk.errors import ApiError

logger = logging.getLogger(__name__)

FLAT_IMAGES = 'flats'
MAINTENANCE_IMAGES = 'maintenance'


def upload_dir(kind):
    path = os.path.join(current_app.config['UPLOAD_FOLDER'], kind)
    os.makedirs(path, exist_ok=True)
    return path


def _file_size(storage):
    stream = storage.stream
    pos = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(pos)
    return size


def _check(files, max_count):
    if len(files) > max_count:
        raise ApiError(400, f'Too many files. Maximum is {max_count} files.', 'validation_error')
    max_size = current_app.config['MAX_IMAGE_SIZE']
    for f in files:
        if not (f.mimetype or '').startswith('image/'):
            raise ApiError(400, 'Only image files are allowed.', 'validation_error')
        if _file_size(f) > max_size:
            raise ApiError(400, f'File size too large. Maximum size is {max_size // (1024 * 1024)}MB.',
                           'validation_error')


def save_images(files, kind, max_count):
    """Validate and store uploaded images, returning the stored file names.

    Nothing is written unless every file passes the checks.
    """
    files = [f for f in files if f and f.filename]
    if not files:
        return []
    _check(files, max_count)

    target = upload_dir(kind)
    prefix = 'maintenance-' if kind == MAINTENANCE_IMAGES else ''
    names = []
    for f in files:
        ext = os.path.splitext(secure_filename(f.filename))[1].lower()
        name = f"{prefix}{int(time.time() * 1000)}-{secrets.token_hex(4)}{ext}"
        f.save(os.path.join(target, name))
        names.append(name)
    logger.info("Stored %d %s image(s)", len(names), kind)
    return names


def delete_images(names, kind):
    """Remove stored images; a file that is already gone is only logged."""
    target = upload_dir(kind)
    for name in names or []:
        path = os.path.join(target, secure_filename(name))
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning("Image file already missing: %s", path)
        else:
            logger.info("Deleted image file %s", path)
