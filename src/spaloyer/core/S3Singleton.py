"""
S3 Singleton module for managing S3 connections using boto3.

This module provides a singleton class for accessing an S3-compatible
object store, ensuring only one connection is created for the run.
"""

import logging
from typing import BinaryIO, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import ClientError

from spaloyer.core import constants
from spaloyer.core.config import TransferConfig
from spaloyer.core.exceptions import BucketAlreadyExists, ConfigurationError

logger = logging.getLogger(__name__)


class S3Singleton:
    """
    Singleton class for S3 access using boto3.

    This class ensures only one boto3 S3 client instance is created and
    exposes the two operations the upload pipeline relies on:
    bucket creation and single-request object upload.
    """

    _instance: Optional['S3Singleton'] = None
    _s3_client = None

    def __new__(cls, config: Optional[TransferConfig] = None) -> 'S3Singleton':
        """
        Create a new instance of S3Singleton if one doesn't exist.

        Args:
            config (TransferConfig, optional): Endpoint and credentials. Required on first use.

        Returns:
            S3Singleton: The singleton instance
        """
        if cls._instance is None:
            if config is None:
                raise ConfigurationError("S3Singleton needs a TransferConfig on first use")

            instance = super(S3Singleton, cls).__new__(cls)
            instance._s3_client = boto3.client(
                's3',
                endpoint_url=config.endpoint_url,
                aws_access_key_id=config.access_key_id,
                aws_secret_access_key=config.secret_access_key,
                region_name=config.region,
                config=Config(
                    signature_version='s3v4',
                    s3={'addressing_style': 'path'}
                )
            )
            cls._instance = instance
            logger.debug(f"Created S3 client for {config.endpoint_url}")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next call builds a new client."""
        cls._instance = None

    @property
    def client(self):
        """
        Get the boto3 S3 client instance.

        Returns:
            boto3.client.S3: The boto3 S3 client instance
        """
        return self._s3_client

    def create_bucket(self, name: str, region: str = constants.DEFAULT_REGION) -> None:
        """
        Create a bucket.

        Args:
            name (str): Bucket name
            region (str): Region of the bucket. us-east-1 doesn't allow a LocationConstraint.

        Raises:
            BucketAlreadyExists: If the bucket is already there
            ClientError: For any other failure reported by the store
        """
        params = {'Bucket': name}
        if region and region != constants.DEFAULT_REGION:
            params['CreateBucketConfiguration'] = {'LocationConstraint': region}

        try:
            self._s3_client.create_bucket(**params)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code')
            if code in constants.BUCKET_EXISTS_CODES:
                raise BucketAlreadyExists(f"Bucket {name} already exists", {"bucket": name, "code": code}) from e
            raise

    def put_object(self, bucket: str, key: str, reader: BinaryIO, size: int,
                   content_type: str = constants.CONTENT_TYPE) -> int:
        """
        Upload the content of an open file as a single object.

        Args:
            bucket (str): Bucket name
            key (str): Object key
            reader (BinaryIO): File object opened in binary mode
            size (int): Expected number of bytes
            content_type (str): Content-Type stored with the object

        Returns:
            int: Number of bytes accepted by the store
        """
        self._s3_client.put_object(
            Bucket=bucket,
            Key=key,
            Body=reader,
            ContentLength=size,
            ContentType=content_type
        )
        return size
