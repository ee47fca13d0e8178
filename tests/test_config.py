"""Tests for config file loading, merging and writing."""

import argparse
import json
import os
import stat

import pytest

from ask_ldap.config import ConfigError, load_config, merge_config_with_args, write_config
from ask_ldap.models import Config
from ask_ldap.profiles import VerbosityError


def make_args(**overrides):
    values = {
        "hostname": None,
        "port": None,
        "use_tls": None,
        "tls_validate": None,
        "base_dn": None,
        "username": None,
        "password": None,
        "verbosity": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_missing_file_gives_no_values(tmp_path):
    assert load_config(str(tmp_path / "nope.conf")) == {}


def test_load_go_style_keys(tmp_path):
    path = tmp_path / "ask.conf"
    path.write_text(json.dumps({
        "BaseDn": "DC=corp,DC=local",
        "Hostname": "dc01.corp.local",
        "Password": "secret",
        "Port": 636,
        "UseTLS": True,
        "Username": "admin@corp.local",
        "Verbosity": 0,
    }))
    assert load_config(str(path)) == {
        "base_dn": "DC=corp,DC=local",
        "hostname": "dc01.corp.local",
        "password": "secret",
        "port": 636,
        "use_tls": True,
        "username": "admin@corp.local",
        "verbosity": 0,
    }


def test_keys_are_case_insensitive_and_unknown_keys_ignored(tmp_path):
    path = tmp_path / "ask.conf"
    path.write_text(json.dumps({"hostname": "ldap.example.com", "PORT": 1389, "color": "blue"}))
    assert load_config(str(path)) == {"hostname": "ldap.example.com", "port": 1389}


def test_home_directory_is_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / ".ask-ldap.conf").write_text(json.dumps({"Hostname": "home.example.com"}))
    assert load_config("~/.ask-ldap.conf") == {"hostname": "home.example.com"}


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        json.dumps({"Port": "389"}),
        json.dumps({"Port": True}),
        json.dumps({"UseTLS": "yes"}),
    ],
)
def test_invalid_files_rejected(tmp_path, content):
    path = tmp_path / "ask.conf"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_defaults_when_nothing_given():
    assert merge_config_with_args({}, make_args()) == Config()
    assert Config().hostname == "localhost"
    assert Config().port == 389
    assert Config().verbosity == 1


def test_cli_overrides_file():
    file_values = {"hostname": "file.example.com", "port": 636, "use_tls": True}
    config = merge_config_with_args(file_values, make_args(hostname="cli.example.com", use_tls=False))
    assert config.hostname == "cli.example.com"
    assert config.port == 636
    assert config.use_tls is False


def test_out_of_range_verbosity_in_file_rejected():
    with pytest.raises(VerbosityError):
        merge_config_with_args({"verbosity": 7}, make_args())


def test_config_is_immutable():
    config = Config()
    with pytest.raises(Exception):
        config.hostname = "other"


def test_write_then_load(tmp_path):
    path = tmp_path / "sub" / "ask.conf"
    config = Config(hostname="dc01", port=636, use_tls=True, base_dn="DC=x", username="u", password="p", verbosity=2)

    written = write_config(str(path), config)

    assert written == path
    data = json.loads(path.read_text())
    assert data["Hostname"] == "dc01"
    assert data["UseTLS"] is True
    assert data["TLSValidate"] is False
    assert merge_config_with_args(load_config(str(path)), make_args()) == config


@pytest.mark.skipif(os.name != "posix", reason="file modes are POSIX only")
def test_written_file_is_private(tmp_path):
    path = tmp_path / "ask.conf"
    write_config(str(path), Config(password="secret"))
    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert not list(tmp_path.glob("*.tmp"))


def test_non_utf8_file_rejected(tmp_path):
    path = tmp_path / "ask.conf"
    path.write_bytes(b'{"Hostname": "\xff\xfe"}')
    with pytest.raises(ConfigError):
        load_config(str(path))
