"""
Upload module for the spaloyer application.

This module provides the command that uploads a local directory to a bucket
of an S3-compatible object store.
"""

from typing import Optional

import typer
from rich.text import Text

from spaloyer.core.config import TransferConfig, load_config
from spaloyer.core.exceptions import ConfigurationError
from spaloyer.core.S3Singleton import S3Singleton
from spaloyer.utils import utils
from spaloyer.utils.cancellation import CancellationToken, cancel_on_interrupt
from spaloyer.utils.upload_utils import upload_directory_to_s3

app = typer.Typer()


def parameters_text(config: TransferConfig) -> Text:
    return Text.assemble(
        ("Starting SPAloyer job with the following parameters:\n", "bold"),
        ("   Endpoint:        ", ""), (config.endpoint, "bold green"),
        ("\n   Secure:          ", ""), (str(config.secure), "bold green"),
        ("\n   AccessKeyID:     ", ""), (config.access_key_id, "bold green"),
        ("\n   SecretAccessKey: ", ""), (config.masked_secret(), "bold green"),
        ("\n   DataPath:        ", ""), (config.data_path, "bold green"),
        ("\n   BucketName:      ", ""), (config.bucket_name, "bold green"),
    )


@app.command()
def upload(
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Object store endpoint (host:port)"),
    access_key_id: Optional[str] = typer.Option(None, "--access-key-id", help="Access key of the object store"),
    secret_access_key: Optional[str] = typer.Option(None, "--secret-access-key", help="Secret key of the object store"),
    secure: Optional[bool] = typer.Option(None, "--secure/--insecure", help="Use HTTPS to reach the object store"),
    data_path: Optional[str] = typer.Option(None, "--data-path", "-d", help="Local directory to upload"),
    bucket_name: Optional[str] = typer.Option(None, "--bucket-name", "-b", help="Destination bucket, random if omitted"),
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output")
) -> None:
    """
    Upload every file of a local directory to an object store bucket.

    Each file is stored under its path relative to the directory. Settings
    not given on the command line are read from the environment (or the
    .env file), then from the YAML file given with --config.
    The command exits with status 1 as soon as one file fails to upload.
    """
    logger = utils.setup_logging(verbose)

    try:
        config = load_config(
            endpoint=endpoint,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            secure=secure,
            data_path=data_path,
            bucket_name=bucket_name,
            config_file=config_file,
        )
    except ConfigurationError as e:
        utils.info(Text(f"Error: {e.message}", style="bold red"))
        logger.error(f"Invalid configuration: {e.message}")
        raise typer.Exit(code=1)

    utils.info(parameters_text(config))

    store = S3Singleton(config)
    with cancel_on_interrupt(CancellationToken()) as token:
        result = upload_directory_to_s3(config, store, token)

    if not result.succeeded:
        raise typer.Exit(code=1)
