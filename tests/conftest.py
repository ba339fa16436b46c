from __future__ import annotations

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    # setup_logging binds the current sys.stderr, which capture fixtures swap out.
    yield
    structlog.reset_defaults()
