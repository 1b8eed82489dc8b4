import io
import os

import pytest
from rich.console import Console

from agog.config import AgogConfig
from agog.project import AgogContext


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own agog settings, including any .env file, out of the tests."""
    for name in list(os.environ):
        if name.startswith("AGOG_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr("agog.cli.load_dotenv", lambda *args, **kwargs: False)


@pytest.fixture
def home(tmp_path):
    return tmp_path / "agog"


@pytest.fixture
def context(home):
    console = Console(file=io.StringIO(), width=200)
    return AgogContext.create(AgogConfig(home=home), console)


@pytest.fixture
def make_tree():
    """Create files and directories from a list of relative paths.

    Paths ending in "/" become directories, everything else a small file.
    """

    def _make_tree(root, paths):
        root.mkdir(parents=True, exist_ok=True)
        for rel in paths:
            target = root / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(f"contents of {rel}")
        return root

    return _make_tree
