"""Shared test configuration and fixtures."""

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

import betting_tools.core.config as config_module

_REQUIRED_ENV_VARS = {
    "SB_USERNAME": "bettor@example.com",
    "SB_PASSWORD": "test-password",
}


@pytest.fixture(autouse=True)
def _set_required_env_vars() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Provide dummy values for env vars required by settings.yaml.

    The default configuration references ``${SB_USERNAME}`` and
    ``${SB_PASSWORD}`` without defaults, so any test that triggers
    ``ConfigLoader`` against the real ``settings.yaml`` would fail where
    those variables are not set. The cached loader is reset around each
    test so one test's environment never leaks into another.
    """
    missing = {k: v for k, v in _REQUIRED_ENV_VARS.items() if k not in os.environ}
    config_module._config = None
    with patch.dict(os.environ, missing):
        yield
    config_module._config = None
