"""Global pytest configuration and fixtures."""
import io

import pytest

from pluginlog import background
from pluginlog.testing import provider_root, sdk_root

TF_ENV_VARS = ("TF_LOG", "TF_LOG_PATH", "TF_LOG_CLI")


@pytest.fixture(autouse=True)
def clean_tf_env(monkeypatch):
    """Keep the host's TF_* variables out of the tests."""
    for name in TF_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def output() -> io.StringIO:
    """In-memory stream loggers write to."""
    return io.StringIO()


@pytest.fixture
def provider_ctx(output):
    """Context with a deterministic provider root logger."""
    return provider_root(background(), output)


@pytest.fixture
def sdk_ctx(output):
    """Context with a deterministic SDK root logger."""
    return sdk_root(background(), output)
