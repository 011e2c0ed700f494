"""
Upload utilities module for the spaloyer application.

This module implements the upload pipeline: walking the data directory,
uploading each regular file under its relative path and aggregating the
number of files and bytes transferred. The run stops at the first failure.
"""

import logging
import os
import stat
from dataclasses import dataclass
from typing import Iterator, Optional

import humanize
from rich.text import Text

import spaloyer.utils.utils as utils
from spaloyer.core import constants
from spaloyer.core.config import TransferConfig
from spaloyer.core.exceptions import (
    BucketProvisioningError,
    FileOpenError,
    SpaloyerError,
    TransferError,
    TraversalError,
    UploadCancelled,
    UploadError,
)
from spaloyer.utils.cancellation import CancellationToken
from spaloyer.utils.s3_utils import ensure_bucket, s3_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """One filesystem node visited during the walk."""

    path: str
    name: str
    size: int
    is_dir: bool
    is_regular: bool = True


@dataclass
class RunResult:
    """
    Totals of one upload run.

    Attributes:
        files (int): Number of files uploaded successfully
        bytes (int): Number of bytes accepted by the store
        error (SpaloyerError, optional): Error that aborted the run, if any
    """

    files: int = 0
    bytes: int = 0
    error: Optional[SpaloyerError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def record(self, size: int) -> None:
        self.files += 1
        self.bytes += size


def _entry(path: str) -> FileEntry:
    try:
        info = os.lstat(path)
        if stat.S_ISLNK(info.st_mode):
            # Symlinks are resolved for their content but never descended into
            info = os.stat(path)
    except OSError as e:
        raise TraversalError(f"Cannot access {path}: {e.strerror or e}", {"path": path}) from e

    return FileEntry(
        path=path,
        name=os.path.basename(path),
        size=info.st_size,
        is_dir=stat.S_ISDIR(info.st_mode),
        is_regular=stat.S_ISREG(info.st_mode),
    )


def walk_tree(root: str) -> Iterator[FileEntry]:
    """
    Visit every entry under ``root`` depth-first, ``root`` included.

    Entries of a directory are visited in lexical order. Symbolic links to
    directories are reported as directories but not followed.

    Args:
        root (str): Absolute path of the directory to walk

    Yields:
        FileEntry: One entry per visited filesystem node

    Raises:
        TraversalError: If an entry cannot be stat'ed or a directory cannot be listed
    """
    yield from _walk(root, follow_links=True)


def _walk(path: str, follow_links: bool) -> Iterator[FileEntry]:
    entry = _entry(path)
    yield entry

    if not entry.is_dir or (os.path.islink(path) and not follow_links):
        return

    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        raise TraversalError(f"Cannot list directory {path}: {e.strerror or e}", {"path": path}) from e

    for name in names:
        yield from _walk(os.path.join(path, name), follow_links=False)


def is_ignored(entry: FileEntry) -> bool:
    return entry.name.endswith(constants.IGNORED_SUFFIX)


def upload_file(store, bucket: str, root: str, entry: FileEntry) -> int:
    """
    Upload one file under the key derived from its path.

    Args:
        store: Object store exposing ``put_object(bucket, key, reader, size, content_type)``
        bucket (str): Destination bucket
        root (str): Directory the key is relative to
        entry (FileEntry): The file to upload

    Returns:
        int: Number of bytes accepted by the store

    Raises:
        FileOpenError: If the file cannot be opened
        TransferError: If the store fails the upload
    """
    key = s3_key(root, entry.path)

    try:
        reader = open(entry.path, "rb")
    except OSError as e:
        raise FileOpenError(f"Cannot open {entry.path}: {e.strerror or e}",
                            {"path": entry.path, "key": key}) from e

    with reader:
        try:
            return store.put_object(bucket, key, reader, entry.size, constants.CONTENT_TYPE)
        except Exception as e:
            raise TransferError(f"Error uploading {key} to bucket {bucket}: {str(e)}",
                                {"path": entry.path, "key": key, "bucket": bucket}) from e


def upload_tree(store, config: TransferConfig, cancel_token: Optional[CancellationToken] = None) -> RunResult:
    """
    Upload every regular file under the configured data path.

    Files are uploaded one at a time in the order they are visited. The
    first traversal, open or transfer error, or a cancellation, stops the
    walk. The returned result then holds the totals reached before the
    failure together with the error.

    Args:
        store: Object store used for the transfers
        config (TransferConfig): Data path and bucket of the run
        cancel_token (CancellationToken, optional): Checked before each entry

    Returns:
        RunResult: Totals of the run
    """
    result = RunResult()
    root = config.data_path

    try:
        for entry in walk_tree(root):
            if cancel_token is not None and cancel_token.cancelled:
                raise UploadCancelled(f"Upload of {root} interrupted", {"path": entry.path})

            if entry.is_dir or is_ignored(entry):
                continue
            if not entry.is_regular:
                logger.debug(f"Skipping special file {entry.path}")
                continue

            key = s3_key(root, entry.path)
            try:
                size = upload_file(store, config.bucket_name, root, entry)
            except UploadError:
                utils.pretty_print(f" - error while uploading '{key}'")
                raise

            result.record(size)
            logger.debug(f"Uploaded {entry.path} as {key} ({size} bytes)")
            utils.pretty_print(f" - successfully uploaded '{key}'")
    except UploadError as e:
        logger.error(e.message)
        result.error = e

    return result


def run_pipeline(store, config: TransferConfig, cancel_token: Optional[CancellationToken] = None) -> RunResult:
    """
    Provision the bucket, then upload the data directory into it.

    Args:
        store: Object store used for the run
        config (TransferConfig): Configuration of the run
        cancel_token (CancellationToken, optional): Checked before each entry

    Returns:
        RunResult: Totals of the run; the error is set if the bucket could
                   not be created or the upload was aborted
    """
    try:
        ensure_bucket(store, config.bucket_name, config.region)
    except BucketProvisioningError as e:
        return RunResult(error=e)

    return upload_tree(store, config, cancel_token)


def summarize(result: RunResult) -> str:
    if result.succeeded:
        return f"Successfully uploaded {result.files} files and {result.bytes} bytes!"
    return f"Error uploading {result.files} files and {result.bytes} bytes: {result.error}!"


def upload_directory_to_s3(
    config: TransferConfig,
    store,
    cancel_token: Optional[CancellationToken] = None
) -> RunResult:
    """
    Run the upload and display its outcome.

    Args:
        config (TransferConfig): Configuration of the run
        store: Object store used for the run
        cancel_token (CancellationToken, optional): Checked before each entry

    Returns:
        RunResult: Totals of the run
    """
    info_text = Text.assemble(
        ("Uploading directory: ", "bold"),
        (config.data_path, "bold green"),
        ("\nTo bucket: ", "bold"),
        (config.bucket_name, "bold green")
    )
    utils.info(info_text)

    result = run_pipeline(store, config, cancel_token)

    size_human = humanize.naturalsize(result.bytes, binary=True)
    if result.succeeded:
        logger.debug(summarize(result))
        utils.info(Text.assemble(
            ("Upload completed!", "bold green"),
            ("\n" + summarize(result), "bold"),
            (f" ({size_human})", "grey53")
        ))
    else:
        logger.debug(summarize(result))
        utils.info(Text.assemble(
            ("Upload failed!", "bold red"),
            ("\n" + summarize(result), "bold"),
            (f" ({size_human})", "grey53")
        ))

    return result
