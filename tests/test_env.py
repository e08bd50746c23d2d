from __future__ import annotations

import logging
import os
import shutil
import subprocess

import pytest

from repotools.utils.env import (
    ConfigNotFound,
    InvalidFileExtension,
    apply_to_environ,
    format_exports,
    load_env_file,
    parse_env_lines,
    strip_quotes,
    validate_env_path,
)


def _write(tmp_path, content, name=".env"):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_key_and_value_are_trimmed_and_unquoted(tmp_path):
    path = _write(tmp_path, '  DB_HOST = "localhost" \n')
    store = {}
    result = load_env_file(path, environ=store)
    assert store == {"DB_HOST": "localhost"}
    assert result.listed == ["DB_HOST"]


def test_comments_and_blank_lines_are_silent(tmp_path, caplog):
    path = _write(tmp_path, "# comment\n\n   \n  # indented comment\nA=1\n")
    with caplog.at_level(logging.WARNING):
        result = load_env_file(path)
    assert result.variables == {"A": "1"}
    assert result.invalid == []
    assert caplog.records == []


def test_line_without_equals_warns_and_continues(tmp_path, caplog):
    path = _write(tmp_path, "JUSTAKEY\nAFTER=ok\n")
    with caplog.at_level(logging.WARNING):
        result = load_env_file(path)
    assert result.variables == {"AFTER": "ok"}
    assert [bad.line_number for bad in result.invalid] == [1]
    assert "JUSTAKEY" in caplog.text


def test_empty_key_is_invalid():
    entries, invalid = parse_env_lines(["  = value", "OK=1"])
    assert [e.key for e in entries] == ["OK"]
    assert invalid[0].line_number == 1


def test_value_keeps_everything_after_first_equals():
    entries, _ = parse_env_lines(["URL=postgres://u:p@h/db?opt=1"])
    assert entries[0].value == "postgres://u:p@h/db?opt=1"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('"quoted"', "quoted"),
        ("'single'", "single"),
        ("\"mixed'", "\"mixed'"),
        ('""', ""),
        ('"', '"'),
        ('""nested""', '"nested"'),
        ("plain", "plain"),
    ],
)
def test_strip_quotes_removes_one_matching_pair(raw, expected):
    assert strip_quotes(raw) == expected


def test_patterns_select_matching_keys_only(tmp_path, caplog):
    path = _write(tmp_path, "TEST_A=1\nDEV_A=2\n")
    store = {}
    with caplog.at_level(logging.WARNING):
        result = load_env_file(path, patterns=["TEST_*"], environ=store)
    assert store == {"TEST_A": "1"}
    assert result.listed == ["TEST_A"]
    assert caplog.records == []


def test_patterns_are_or_combined_and_support_classes(tmp_path):
    path = _write(tmp_path, "A1=x\nB2=y\nC3=z\nAB=w\n")
    result = load_env_file(path, patterns=["A?", "[BC]3"])
    assert list(result.variables) == ["A1", "C3", "AB"]


def test_list_only_never_touches_the_store(tmp_path):
    path = _write(tmp_path, "TEST_A='1'\nTEST_B=2\n")
    store = {"UNRELATED": "kept"}
    result = load_env_file(path, patterns=["TEST_*"], list_only=True, environ=store)
    assert store == {"UNRELATED": "kept"}
    assert result.variables == {}
    assert result.listed == ["TEST_A", "TEST_B"]
    assert result.unmatched is False


def test_unmatched_patterns_warn_without_failing(tmp_path, caplog):
    path = _write(tmp_path, "DEV_A=2\n")
    with caplog.at_level(logging.WARNING):
        result = load_env_file(path, patterns=["PROD_*", "QA_*"])
    assert result.unmatched is True
    assert "PROD_*, QA_*" in caplog.text


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(ConfigNotFound):
        load_env_file(tmp_path / ".env")


def test_wrong_extension_is_fatal_before_loading(tmp_path):
    path = _write(tmp_path, "A=1\n", name="settings.txt")
    store = {}
    with pytest.raises(InvalidFileExtension):
        load_env_file(path, environ=store)
    assert store == {}


@pytest.mark.parametrize("name", [".env", "staging.env"])
def test_env_names_are_accepted(tmp_path, name):
    path = _write(tmp_path, "A=1\n", name=name)
    assert validate_env_path(path) == path


def test_env_local_is_rejected(tmp_path):
    path = _write(tmp_path, "A=1\n", name=".env.local")
    with pytest.raises(InvalidFileExtension):
        validate_env_path(path)


def test_apply_to_environ_copies_variables():
    target = {"KEEP": "1"}
    apply_to_environ({"NEW": "2"}, environ=target)
    assert target == {"KEEP": "1", "NEW": "2"}


def test_format_exports_quotes_for_the_shell():
    assert format_exports({"A": "plain", "B": "two words"}) == ["export A=plain", "export B='two words'"]


def test_format_exports_skips_keys_that_are_not_shell_names(tmp_path, caplog):
    path = _write(tmp_path, "X;touch pwned;Y=1\nGOOD_KEY=2\n$(id)=3\n")
    result = load_env_file(path)
    with caplog.at_level(logging.WARNING):
        lines = format_exports(result.variables)
    assert lines == ["export GOOD_KEY=2"]
    assert "X;touch pwned;Y" in caplog.text
    assert "$(id)" in caplog.text


def test_exported_lines_are_safe_to_eval(tmp_path):
    sh = shutil.which("sh")
    if sh is None:
        pytest.skip("no POSIX shell available")
    path = _write(tmp_path, "X;touch pwned;Y=1\nSAFE='a; touch also-pwned'\n")
    script = "\n".join(format_exports(load_env_file(path).variables)) + '\nprintf %s "$SAFE"\n'
    completed = subprocess.run([sh, "-c", script], cwd=tmp_path, capture_output=True, text=True, check=True)
    assert completed.stdout == "a; touch also-pwned"
    assert not (tmp_path / "pwned").exists()
    assert not (tmp_path / "also-pwned").exists()


def test_apply_to_environ_skips_keys_the_os_rejects(monkeypatch, caplog):
    monkeypatch.setenv("REPOTOOLS_TEST_OK", "placeholder")
    with caplog.at_level(logging.WARNING):
        applied = apply_to_environ({"BAD\x00KEY": "1", "REPOTOOLS_TEST_OK": "2"})
    assert applied == {"REPOTOOLS_TEST_OK": "2"}
    assert os.environ["REPOTOOLS_TEST_OK"] == "2"
    assert "BAD" in caplog.text
