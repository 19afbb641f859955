"""Fixtures for the rose examples.

Each example directory holds an ``app.py`` defining a module-level
``app``.  Tests get a freshly executed copy of it, so state folded by
one test never leaks into the next, plus a ``TestClient`` already
entered on that same App.
"""

import runpy
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from rose import App
from rose.testing import TestClient


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> App:
    """The ``app`` from the app.py beside the requesting test file."""
    namespace = runpy.run_path(str(Path(request.path).parent / "app.py"), run_name="example")
    app = namespace["app"]
    assert isinstance(app, App), f"{request.path.parent.name}/app.py must define a rose App"
    return app


@pytest.fixture
async def client(example_app: App) -> AsyncIterator[TestClient]:
    async with TestClient(example_app) as test_client:
        yield test_client
