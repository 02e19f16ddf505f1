import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path so tests can import the local `src/` package.
ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    # Unit tests never shell out to git and always use the packaged templates.
    monkeypatch.setenv("CREATE_DROID_GIT_INIT", "0")
    monkeypatch.delenv("CREATE_DROID_TEMPLATES_DIR", raising=False)
    monkeypatch.delenv("CREATE_DROID_ADDON_REGISTRY_URL", raising=False)


class OfflineSession:
    """requests.Session stand-in that answers every GET with 404."""

    def __init__(self):
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        return _NotFound()


class _NotFound:
    status_code = 404

    def json(self):
        raise ValueError("no body")


@pytest.fixture
def offline_session() -> OfflineSession:
    return OfflineSession()
