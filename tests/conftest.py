"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from corral import EventBus, Model, names, reset_settings

_ENV_KEYS = ("CORRAL_CLIENT_ID_PREFIX", "CORRAL_LOG_LEVEL", "CORRAL_STRUCTURED_LOGS")


@pytest.fixture
def settings_env(monkeypatch):
    """Clean CORRAL_* environment with the settings cache reset around the test."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield monkeypatch
    reset_settings()


@pytest.fixture
def bus():
    """Fresh standalone EventBus."""
    return EventBus()


@pytest.fixture
def item_cls():
    """Freshly configured Item model with name and price."""

    class Item(Model):
        pass

    return Item.configure("Item", "name", "price")


@pytest.fixture
def event_log(item_cls):
    """Names of lifecycle events (except refresh) triggered on Item, in order."""
    log: list[str] = []
    for name in names.LIFECYCLE_EVENTS:
        if name == names.REFRESH:
            continue
        item_cls.bind(name, lambda *args, name=name: log.append(name))
    return log
