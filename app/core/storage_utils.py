# app/core/storage_utils.py
import logging

from app.core.config import get_settings
from app.core.supabase_client import supabase_admin

logger = logging.getLogger(__name__)


def _bucket() -> str:
    return get_settings().SUPABASE_STORAGE_BUCKET


def upload_to_storage(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upload raw bytes to Supabase Storage and return a public URL.

    If a file already exists at this path, it is overwritten
    thanks to the 'upsert' option.

    Args:
        path: Full object path inside the bucket.
              Example: "movies/<uuid>/poster.png"
        file_bytes: File content in bytes.
        content_type: MIME type stored with the object.

    Raises:
        RuntimeError: if Supabase is not configured.
        Any exception raised by Supabase client if upload fails.
    """
    storage = supabase_admin().storage.from_(_bucket())
    storage.upload(path, file_bytes, {"upsert": "true", "content-type": content_type})
    return storage.get_public_url(path)


def delete_from_storage(path: str) -> None:
    """
    Delete a file from Supabase Storage by its object path
    (relative to the bucket).
    """
    supabase_admin().storage.from_(_bucket()).remove([path])


def extract_path_from_public_url(url: str) -> str | None:
    """
    Given a public URL, extract the object path relative to the bucket.

    Example:
        https://<proj>.supabase.co/storage/v1/object/public/posters/movies/m/poster.png
        -> 'movies/m/poster.png'

    Returns None for URLs outside this bucket (e.g. external poster links).
    """
    marker = f"/storage/v1/object/public/{_bucket()}/"
    idx = url.find(marker)
    if idx == -1:
        return None
    path = url[idx + len(marker) :]
    # get_public_url may append an empty query string
    return path.split("?", 1)[0] or None


def delete_public_url(url: str) -> None:
    """
    Best-effort delete of a file by its public URL.
    No-op if the URL does not belong to this bucket; failures are logged.
    """
    path = extract_path_from_public_url(url)
    if not path:
        return
    try:
        delete_from_storage(path)
    except Exception as exc:
        logger.warning("Could not delete storage object %s: %s", path, exc)
