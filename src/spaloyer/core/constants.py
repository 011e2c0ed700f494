"""
Constants module for the spaloyer application.

This module provides constants used throughout the application.
"""

# Object store defaults
DEFAULT_ENDPOINT = "127.0.0.1:9000"
DEFAULT_SECURE = False
DEFAULT_ACCESS_KEY_ID = "D2PL1U22NFIPSR3LIMDP"
DEFAULT_SECRET_ACCESS_KEY = "ARoj43ITJX4s0i4s8UqNPR8NIYW+pz6ohcI4u0sQ"
DEFAULT_REGION = "us-east-1"
DEFAULT_DATA_PATH = "dist/"

# Upload behaviour
CONTENT_TYPE = "application/octet-stream"
IGNORED_SUFFIX = ".DS_Store"

# Error codes returned by S3-compatible stores when the bucket is already there
BUCKET_EXISTS_CODES = {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}

# Environment variables
ENV_ENDPOINT = "APP_UPLOAD_ENDPOINT"
ENV_ACCESS_KEY_ID = "APP_UPLOAD_ACCESS_KEY"
ENV_SECRET_ACCESS_KEY = "APP_UPLOAD_SECRET_KEY"
ENV_SECURE = "SECURE"
ENV_DATA_PATH = "DATA_PATH"
ENV_BUCKET_NAME = "APP_ASSETS_FOLDER"
