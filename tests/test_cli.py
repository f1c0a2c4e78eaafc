"""CLI tests using click's CliRunner."""

import json
import warnings

import pytest
from click.testing import CliRunner

from userstore.cli import main

ALICE = '{"id":"1","email":"a@x.com","age":30}'


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture()
def users_file(tmp_path):
    return tmp_path / "users.json"


def _invoke(runner, *args):
    return runner.invoke(main, list(args))


def test_help_lists_flags(runner):
    result = _invoke(runner, "--help")
    assert result.exit_code == 0
    for flag in ("--operation", "--id", "--item", "--fileName", "--lock"):
        assert flag in result.output


def test_add_find_remove_sequence(runner, users_file):
    f = str(users_file)

    result = _invoke(runner, "--operation", "add", "--item", ALICE, "--fileName", f)
    assert result.exit_code == 0, result.output
    assert result.output == ""
    assert users_file.read_text() == '[{"id":"1","email":"a@x.com","age":30}]'

    result = _invoke(runner, "--operation", "findById", "--id", "1", "--fileName", f)
    assert result.exit_code == 0, result.output
    assert result.output == '{"id":"1","email":"a@x.com","age":30}'

    result = _invoke(runner, "--operation", "remove", "--id", "1", "--fileName", f)
    assert result.exit_code == 0, result.output
    assert users_file.read_text() == "[]"

    result = _invoke(runner, "--operation", "remove", "--id", "1", "--fileName", f)
    assert result.exit_code == 1
    assert "Item with id 1 not found" in result.output


def test_list_outputs_raw_bytes(runner, users_file):
    users_file.write_text('[ {"id": "1"} ]\n')
    result = _invoke(runner, "--operation", "list", "--fileName", str(users_file))
    assert result.exit_code == 0
    assert result.output == '[ {"id": "1"} ]\n'


def test_list_with_lock(runner, users_file):
    users_file.write_text(json.dumps([json.loads(ALICE)]))
    result = _invoke(runner, "--operation", "list", "--lock", "--fileName", str(users_file))
    assert result.exit_code == 0
    assert json.loads(result.output) == [json.loads(ALICE)]


def test_missing_file_name(runner, monkeypatch):
    import userstore.config as config_mod
    monkeypatch.setattr(config_mod, "USERS_FILE", "")
    result = _invoke(runner, "--operation", "list")
    assert result.exit_code == 1
    assert "--fileName flag has to be specified" in result.output


def test_file_name_from_config(runner, monkeypatch, users_file):
    import userstore.config as config_mod
    monkeypatch.setattr(config_mod, "USERS_FILE", str(users_file))
    result = _invoke(runner, "--operation", "add", "--item", ALICE)
    assert result.exit_code == 0, result.output
    assert json.loads(users_file.read_text()) == [json.loads(ALICE)]


def test_missing_operation(runner, users_file):
    result = _invoke(runner, "--fileName", str(users_file))
    assert result.exit_code == 1
    assert "--operation flag has to be specified" in result.output


def test_unknown_operation(runner, users_file):
    result = _invoke(runner, "--operation", "update", "--fileName", str(users_file))
    assert result.exit_code == 1
    assert "--operation flag does not exist" in result.output


def test_missing_item(runner, users_file):
    result = _invoke(runner, "--operation", "add", "--fileName", str(users_file))
    assert result.exit_code == 1
    assert "--item flag has to be specified" in result.output


def test_missing_id(runner, users_file):
    result = _invoke(runner, "--operation", "findById", "--fileName", str(users_file))
    assert result.exit_code == 1
    assert "--id flag has to be specified" in result.output


def test_malformed_item(runner, users_file):
    result = _invoke(runner, "--operation", "add", "--item", "{oops", "--fileName", str(users_file))
    assert result.exit_code == 1
    assert "error during item parsing" in result.output
    assert users_file.read_text() == ""


def test_find_on_empty_file_fails(runner, users_file):
    result = _invoke(runner, "--operation", "findById", "--id", "1", "--fileName", str(users_file))
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_io_error_reported(runner, tmp_path):
    result = _invoke(runner, "--operation", "list", "--fileName", str(tmp_path))
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_deeply_nested_file_reports_error(runner, users_file):
    users_file.write_bytes(b"[" * 100000 + b"]" * 100000)
    result = _invoke(runner, "--operation", "findById", "--id", "1", "--fileName", str(users_file))
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert not isinstance(result.exception, RecursionError)


def test_output_emits_no_deprecation_warnings(runner, users_file):
    users_file.write_text("[]")
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        result = _invoke(runner, "--operation", "list", "--fileName", str(users_file))
    assert result.exit_code == 0, result.output
    assert result.exception is None
    assert result.output == "[]"
