import sys
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    return tmp_path / ".config" / "nutcracker"


@pytest.fixture
def offline_fetch(monkeypatch):
    """Serve filter lists from a dict instead of the network."""
    from nutcracker import __main__ as entrypoint
    from nutcracker.errors import FilterFetchError

    pages: dict[str, str] = {}

    def _fetch(url: str) -> str:
        if url not in pages:
            raise FilterFetchError(url, "HTTP 404")
        return pages[url]

    monkeypatch.setattr(entrypoint, "fetch_filter_list", _fetch)
    return pages


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
