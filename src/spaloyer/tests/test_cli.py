"""Tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from spaloyer.__main__ import app
from spaloyer.commands import upload as upload_command
from spaloyer.core import constants

from conftest import FakeStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in (constants.ENV_DATA_PATH, constants.ENV_BUCKET_NAME, constants.ENV_ENDPOINT):
        monkeypatch.delenv(name, raising=False)


def use_store(monkeypatch, store):
    monkeypatch.setattr(upload_command, "S3Singleton", lambda config: store)


def test_upload_command_succeeds(sample_tree, monkeypatch):
    store = FakeStore()
    use_store(monkeypatch, store)

    result = runner.invoke(app, ["upload", "--data-path", str(sample_tree), "--bucket-name", "assets"])

    assert result.exit_code == 0
    assert "successfully uploaded 'a.txt'" in result.output
    assert store.buckets == {"assets"}
    assert len(store.uploaded_keys) == 2


def test_upload_command_exits_with_error_on_failure(sample_tree, monkeypatch):
    use_store(monkeypatch, FakeStore(fail_on_key="a.txt"))

    result = runner.invoke(app, ["upload", "--data-path", str(sample_tree), "--bucket-name", "assets"])

    assert result.exit_code == 1
    assert "error while uploading 'a.txt'" in result.output


def test_upload_command_rejects_missing_directory(tmp_path, monkeypatch):
    use_store(monkeypatch, FakeStore())

    result = runner.invoke(app, ["upload", "--data-path", str(tmp_path / "missing")])

    assert result.exit_code == 1


def test_upload_command_writes_log_file(sample_tree, tmp_path, monkeypatch):
    use_store(monkeypatch, FakeStore())

    runner.invoke(app, ["upload", "--data-path", str(sample_tree), "--bucket-name", "assets"])

    assert list((tmp_path / "log").glob("log_*.log"))


def test_about_command():
    result = runner.invoke(app, ["about"])

    assert result.exit_code == 0
    assert "SPAloyer" in result.output
