"""
Object storage backends for the upload relay
"""
import logging
import os
import uuid
from collections import namedtuple

from utils.security import file_extension, is_safe_path

logger = logging.getLogger(__name__)

StoredObject = namedtuple('StoredObject', ['key', 'url'])


class StorageError(Exception):
    """Raised when the storage backend cannot save or delete an object"""


class StorageBackend:
    """Interface for the place uploaded bytes are relayed to"""

    def save(self, file):
        """Store a werkzeug FileStorage and return a StoredObject"""
        raise NotImplementedError

    def delete(self, key):
        raise NotImplementedError

    @staticmethod
    def generate_key(filename):
        ext = file_extension(filename)
        key = uuid.uuid4().hex
        return f'{key}.{ext}' if ext else key


class LocalStorage(StorageBackend):
    """Stores objects as flat files in a directory

    base_url is the public prefix objects are served from; without one
    the URL points at the app's own /uploads/files/ route.
    """

    def __init__(self, root, base_url=None):
        self.root = os.path.abspath(root)
        self.base_url = (base_url or '/uploads/files').rstrip('/')
        os.makedirs(self.root, exist_ok=True)

    def path_for(self, key):
        path = os.path.join(self.root, key)
        if not key or not is_safe_path(path, self.root) or os.path.dirname(key):
            raise StorageError(f'Invalid storage key: {key!r}')
        return path

    def url_for(self, key):
        return f'{self.base_url}/{key}'

    def save(self, file):
        key = self.generate_key(file.filename)
        path = self.path_for(key)
        try:
            file.save(path)
        except OSError as e:
            logger.error(f'Failed to store {key}: {e}')
            raise StorageError('Failed to upload file to storage') from e
        logger.info(f'Stored upload {key}')
        return StoredObject(key, self.url_for(key))

    def delete(self, key):
        path = self.path_for(key)
        try:
            os.remove(path)
        except FileNotFoundError:
            # Already gone remotely; the caller still drops its record
            logger.warning(f'Stored object {key} was already missing')
        except OSError as e:
            logger.error(f'Failed to delete {key}: {e}')
            raise StorageError('Failed to delete file from storage') from e
        else:
            logger.info(f'Deleted stored object {key}')
