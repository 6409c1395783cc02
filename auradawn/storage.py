"""
Object storage for uploaded media.

Works against any S3-compatible store (AWS S3, MinIO, Cloudflare R2).
Configure it through the S3_* keys of the AURADAWN setting.

This module provides:
- get_s3_client(): boto3 S3 client for the configured endpoint
- build_object_key() / public_url(): naming of stored objects
- upload_file(): put an uploaded file in the bucket and record an Asset
- delete_assets(): remove objects and their Asset rows
- set_public_read_policy(): allow anonymous GETs on the bucket
"""
import json
import logging
import mimetypes
import re
import uuid

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image, UnidentifiedImageError

from .conf import blog_settings
from .exceptions import StorageError
from .models import Asset

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def get_s3_client():
    """
    Get a boto3 S3 client for the configured bucket endpoint.

    Path-style addressing is required by MinIO; it is on by default.
    """
    addressing_style = "path" if blog_settings.S3_FORCE_PATH_STYLE else "auto"
    return boto3.client(
        "s3",
        aws_access_key_id=blog_settings.S3_ACCESS_KEY_ID or None,
        aws_secret_access_key=blog_settings.S3_SECRET_ACCESS_KEY or None,
        endpoint_url=blog_settings.S3_ENDPOINT or None,
        region_name=blog_settings.S3_REGION,
        config=Config(s3={"addressing_style": addressing_style}),
    )


def sanitize_filename(filename):
    """Replace every character outside [a-zA-Z0-9.-] with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


def build_object_key(filename):
    """Return a unique object key: ``<uuid4>-<sanitized filename>``."""
    return f"{uuid.uuid4()}-{sanitize_filename(filename)}"


def public_url(key):
    """Public URL of an object, served from S3_PUBLIC_DOMAIN."""
    return f"{blog_settings.S3_PUBLIC_DOMAIN.rstrip('/')}/{key}"


def read_image_size(file_obj):
    """
    Return ``(width, height)`` of an image file, or ``(None, None)``.

    The file position is restored to the start afterwards.
    """
    try:
        with Image.open(file_obj) as img:
            return img.size
    except (UnidentifiedImageError, OSError):
        logger.warning("Could not read image dimensions from %s", getattr(file_obj, "name", file_obj))
        return None, None
    finally:
        file_obj.seek(0)


def upload_file(uploaded_file, client=None):
    """
    Store an uploaded file in the bucket and create its Asset.

    Args:
        uploaded_file: Django UploadedFile (or any file object with a name)
        client: optional boto3 client, mostly for tests

    Returns:
        The created Asset

    Raises:
        StorageError: the bucket rejected the upload
    """
    client = client or get_s3_client()
    filename = uploaded_file.name
    key = build_object_key(filename)
    content_type = (
        getattr(uploaded_file, "content_type", None)
        or mimetypes.guess_type(filename)[0]
        or "application/octet-stream"
    )

    width = height = None
    if content_type.startswith("image/"):
        width, height = read_image_size(uploaded_file)

    body = uploaded_file.read()
    try:
        client.put_object(
            Bucket=blog_settings.S3_BUCKET_NAME,
            Key=key,
            Body=body,
            ContentType=content_type,
        )
    except (BotoCoreError, ClientError) as e:
        raise StorageError(f"Failed to upload {filename}", key=key) from e

    asset = Asset.objects.create(
        url=public_url(key),
        key=key,
        filename=filename,
        mime_type=content_type,
        size=len(body),
        width=width,
        height=height,
    )
    logger.info("Uploaded %s as %s (%d bytes)", filename, key, asset.size)
    return asset


def delete_assets(assets, client=None):
    """
    Delete the objects behind ``assets`` and then their Asset rows.

    A failed object delete is logged and the row is removed anyway, so the
    library never lists files the console can no longer manage.

    Returns:
        Number of Asset rows deleted
    """
    assets = list(assets)
    if not assets:
        return 0

    client = client or get_s3_client()
    for asset in assets:
        if not asset.key:
            continue
        try:
            client.delete_object(Bucket=blog_settings.S3_BUCKET_NAME, Key=asset.key)
        except (BotoCoreError, ClientError):
            logger.exception("Failed to delete object %s", asset.key)

    deleted, _ = Asset.objects.filter(pk__in=[asset.pk for asset in assets]).delete()
    logger.info("Deleted %d assets", deleted)
    return deleted


def public_read_policy(bucket_name):
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Sid": "PublicReadGetObject",
                "Effect": "Allow",
                "Principal": "*",
                "Action": ["s3:GetObject"],
                "Resource": [f"arn:aws:s3:::{bucket_name}/*"],
            },
        ],
    }


def set_public_read_policy(client=None):
    """
    Allow anonymous reads of every object in the bucket.

    Raises:
        StorageError: the bucket rejected the policy
    """
    client = client or get_s3_client()
    bucket_name = blog_settings.S3_BUCKET_NAME
    try:
        client.put_bucket_policy(
            Bucket=bucket_name,
            Policy=json.dumps(public_read_policy(bucket_name)),
        )
    except (BotoCoreError, ClientError) as e:
        raise StorageError(f"Failed to set bucket policy on {bucket_name}") from e
    logger.info("Set public read policy on bucket %s", bucket_name)
