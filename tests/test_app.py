"""Tests for ExpiryLabelApp (smoke tests + CLI)."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from textual.widgets import Footer, Header

import expiry_label.app as app_module
from expiry_label.app import ExpiryLabelApp, main
from expiry_label.config import LabelConfig
from expiry_label.widgets import ExpiryLabel


@pytest.fixture(autouse=True)
def _mock_config(monkeypatch):
    """Keep the user's config file and environment out of app tests."""
    monkeypatch.setattr(app_module, "load_config", lambda: LabelConfig())


@pytest.mark.asyncio
async def test_app_composes_widgets() -> None:
    """App compose() yields Header, ExpiryLabel, Footer."""
    app = ExpiryLabelApp("2099-01-01T00:00:00Z")
    async with app.run_test() as pilot:
        assert app.query_one(Header) is not None
        assert app.query_one(ExpiryLabel) is not None
        assert app.query_one(Footer) is not None


@pytest.mark.asyncio
async def test_app_passes_config_to_label() -> None:
    config = LabelConfig(before="Closes", warn_at=60)
    app = ExpiryLabelApp("2099-01-01T00:00:00Z", config)
    async with app.run_test() as pilot:
        await pilot.pause()
        label = app.query_one(ExpiryLabel)
        assert label.warn_at == 60
        assert "Closes in" in label._display_text


@pytest.mark.asyncio
async def test_app_quits_on_q() -> None:
    app = ExpiryLabelApp("2099-01-01T00:00:00Z")
    async with app.run_test() as pilot:
        await pilot.press("q")
        await pilot.pause()
    assert not app.is_running


def test_main_applies_cli_overrides(monkeypatch) -> None:
    created: list[tuple[str, LabelConfig]] = []

    def fake_app(when, config):
        created.append((when, config))
        return MagicMock()

    monkeypatch.setattr(app_module, "ExpiryLabelApp", fake_app)
    main(["2099-01-01T00:00:00Z", "--before", "Ends", "--warn-at", "300"])

    when, config = created[0]
    assert when == "2099-01-01T00:00:00Z"
    assert config.before == "Ends"
    assert config.warn_at == 300
    assert config.after == "Expired"


def test_main_passes_prefix_and_suffix(monkeypatch) -> None:
    created: list[tuple[str, LabelConfig]] = []

    def fake_app(when, config):
        created.append((when, config))
        return MagicMock()

    monkeypatch.setattr(app_module, "ExpiryLabelApp", fake_app)
    main(["2099-01-01T00:00:00Z", "--msg-prefix", "Offer: ", "--msg-suffix", "!"])

    _, config = created[0]
    assert config.msg_prefix == "Offer: "
    assert config.msg_suffix == "!"


def test_main_requires_cutoff() -> None:
    with pytest.raises(SystemExit):
        main([])
