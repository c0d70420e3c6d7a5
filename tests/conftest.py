import pytest

from leasedesk import state


@pytest.fixture(autouse=True)
def session_file(tmp_path, monkeypatch):
    """Keep session persistence out of the working directory."""
    path = tmp_path / "session.json"
    monkeypatch.setattr(state, "SESSION_FILE", str(path))
    return path
