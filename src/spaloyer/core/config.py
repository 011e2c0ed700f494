"""
Configuration module for the spaloyer application.

This module builds the TransferConfig consumed by the upload pipeline.
Values are resolved from, in order of priority, explicit arguments (the
command line), environment variables, an optional YAML file and finally
the built-in defaults.
"""

import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from spaloyer.core import constants
from spaloyer.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class TransferConfig:
    """
    Fully resolved settings for one upload run.

    Attributes:
        data_path (str): Absolute path of the directory to upload
        bucket_name (str): Name of the destination bucket
        endpoint (str): Object store endpoint as host:port
        access_key_id (str): Access key of the credential pair
        secret_access_key (str): Secret key of the credential pair
        secure (bool): Use HTTPS instead of plain HTTP
        region (str): Region passed when creating the bucket
    """

    data_path: str
    bucket_name: str
    endpoint: str = constants.DEFAULT_ENDPOINT
    access_key_id: str = constants.DEFAULT_ACCESS_KEY_ID
    secret_access_key: str = constants.DEFAULT_SECRET_ACCESS_KEY
    secure: bool = constants.DEFAULT_SECURE
    region: str = constants.DEFAULT_REGION

    @property
    def endpoint_url(self) -> str:
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.endpoint}"

    def masked_secret(self) -> str:
        """Return the secret key with everything but the last 4 characters hidden."""
        if len(self.secret_access_key) <= 4:
            return "*" * len(self.secret_access_key)
        return "*" * (len(self.secret_access_key) - 4) + self.secret_access_key[-4:]


def parse_bool(value: Union[str, bool]) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationError(f"Invalid boolean value: {value!r}", {"value": str(value)})


def read_yaml_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML configuration file.

    Args:
        path (str | Path): Path to the YAML file

    Returns:
        Dict[str, Any]: Mapping of configuration keys to values

    Raises:
        ConfigurationError: If the file cannot be read or is not a mapping
    """
    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as fp:
            payload = yaml.safe_load(fp) or {}
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {config_path}: {exc}",
                                 {"path": str(config_path)}) from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}",
                                 {"path": str(config_path)}) from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping",
                                 {"path": str(config_path)})
    return payload


def _pick(explicit: Any, env_var: str, file_values: Dict[str, Any], file_key: str, default: Any) -> Any:
    if explicit is not None:
        return explicit
    if env_var in os.environ:
        return os.environ[env_var]
    if file_values.get(file_key) is not None:
        return file_values[file_key]
    return default


def load_config(
    endpoint: Optional[str] = None,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    secure: Optional[bool] = None,
    data_path: Optional[str] = None,
    bucket_name: Optional[str] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> TransferConfig:
    """
    Resolve a TransferConfig from arguments, environment, YAML file and defaults.

    A relative data path is made absolute against the current working
    directory, and a random bucket name is generated when none was given.

    Args:
        endpoint (str, optional): Object store endpoint (host:port)
        access_key_id (str, optional): Access key
        secret_access_key (str, optional): Secret key
        secure (bool, optional): Use HTTPS
        data_path (str, optional): Directory to upload
        bucket_name (str, optional): Destination bucket
        config_file (str | Path, optional): YAML file with the same settings

    Returns:
        TransferConfig: The resolved configuration

    Raises:
        ConfigurationError: If the data path does not exist or the YAML file is invalid
    """
    file_values = read_yaml_config(config_file) if config_file else {}

    resolved_path = Path(_pick(data_path, constants.ENV_DATA_PATH, file_values, "data_path",
                               constants.DEFAULT_DATA_PATH))
    if not resolved_path.is_absolute():
        resolved_path = Path.cwd() / resolved_path
    resolved_path = Path(os.path.abspath(resolved_path))

    if not resolved_path.is_dir():
        raise ConfigurationError(f"Directory '{resolved_path}' does not exist or is not a directory",
                                 {"path": str(resolved_path)})

    resolved_bucket = _pick(bucket_name, constants.ENV_BUCKET_NAME, file_values, "bucketname", "")
    if not resolved_bucket:
        resolved_bucket = str(uuid.uuid4())

    return TransferConfig(
        data_path=str(resolved_path),
        bucket_name=str(resolved_bucket),
        endpoint=str(_pick(endpoint, constants.ENV_ENDPOINT, file_values, "endpoint",
                           constants.DEFAULT_ENDPOINT)),
        access_key_id=str(_pick(access_key_id, constants.ENV_ACCESS_KEY_ID, file_values, "accesskeyid",
                                constants.DEFAULT_ACCESS_KEY_ID)),
        secret_access_key=str(_pick(secret_access_key, constants.ENV_SECRET_ACCESS_KEY, file_values,
                                    "secretaccesskey", constants.DEFAULT_SECRET_ACCESS_KEY)),
        secure=parse_bool(_pick(secure, constants.ENV_SECURE, file_values, "secure",
                                constants.DEFAULT_SECURE)),
    )
