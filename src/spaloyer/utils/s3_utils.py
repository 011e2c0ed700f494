"""
S3 utilities module for the spaloyer application.

This module provides the helpers shared by the upload pipeline:
deriving object keys from local paths and provisioning the target bucket.
"""

import logging
import os

from botocore.exceptions import BotoCoreError, ClientError

from spaloyer.core import constants
from spaloyer.core.exceptions import BucketAlreadyExists, BucketProvisioningError

logger = logging.getLogger(__name__)


def s3_key(root: str, current: str) -> str:
    """
    Derive the object key of a local path.

    The key is ``current`` with the ``root`` directory prefix and its
    separator removed. Separators inside the remainder are kept as they
    are on the local filesystem and nothing is escaped.

    Args:
        root (str): Absolute path of the uploaded directory
        current (str): Absolute path of an entry under ``root``

    Returns:
        str: The object key, or ``current`` unchanged if it is not under ``root``
    """
    prefix = root + os.sep
    if current.startswith(prefix):
        return current[len(prefix):]
    return current


def ensure_bucket(store, bucket: str, region: str = constants.DEFAULT_REGION) -> None:
    """
    Create the bucket if it does not exist yet.

    Args:
        store: Object store exposing ``create_bucket(name, region)``
        bucket (str): Bucket name
        region (str): Region of the bucket

    Raises:
        BucketProvisioningError: If the bucket cannot be created for any reason
                                 other than already existing
    """
    try:
        store.create_bucket(bucket, region)
        logger.info(f"Created bucket {bucket} in {region}")
    except BucketAlreadyExists:
        logger.info(f"Bucket {bucket} already exists, reusing it")
    except (ClientError, BotoCoreError, OSError) as e:
        logger.error(f"Error creating bucket {bucket}: {str(e)}")
        raise BucketProvisioningError(f"Cannot create bucket {bucket}: {e}",
                                      {"bucket": bucket, "region": region}) from e
