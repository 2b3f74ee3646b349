"""Tests for configuration loading."""

import json
import os
from pathlib import Path

import pytest

from lims_core.config import DEFAULT_CONFIG_FILE, LimsConfig, load_config


@pytest.fixture(autouse=True)
def _clear_lims_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host LIMS_* variables out of these tests."""
    for key in list(os.environ):
        if key.upper().startswith("LIMS_"):
            monkeypatch.delenv(key)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.json")
    assert config.model_dump() == LimsConfig.model_construct().model_dump()
    assert config.billing.payment_tolerance == 0.01
    assert config.lifecycle.reopen_verified_on_edit is True
    assert config.audit.default_actor == "System"


def test_partial_file_fills_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"billing": {"currency": "USD"}}))

    config = load_config(path)

    assert config.billing.currency == "USD"
    assert config.billing.payment_tolerance == 0.01


def test_nested_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"billing": {"currency": "EUR"}}))
    monkeypatch.setenv("LIMS_BILLING__CURRENCY", "USD")
    monkeypatch.setenv("LIMS_LIFECYCLE__REOPEN_VERIFIED_ON_EDIT", "false")

    config = load_config(path)

    assert config.billing.currency == "USD"
    assert config.lifecycle.reopen_verified_on_edit is False


def test_keyword_arguments_win() -> None:
    config = LimsConfig(audit={"default_actor": "Reception"})
    assert config.audit.default_actor == "Reception"


def test_default_file_is_anchored_to_project_root(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Loading does not depend on the working directory."""
    monkeypatch.chdir(tmp_path)
    assert DEFAULT_CONFIG_FILE.is_file()
    assert LimsConfig().billing.currency == "PKR"


def test_shipped_config_is_valid() -> None:
    """The repository's configs/config.json should load cleanly."""
    config_path = Path(__file__).parent.parent / "configs" / "config.json"
    config = load_config(config_path)
    assert config.billing.currency == "PKR"
