import subprocess

from src.scaffold.git import init_repository


class _FakeRunner:
    def __init__(self, fail_on: str | None = None, exc: Exception | None = None):
        self.calls: list[tuple[list[str], str | None]] = []
        self._fail_on = fail_on
        self._exc = exc

    def run(self, args, *, cwd=None, check=True):
        self.calls.append((args, cwd))
        if self._fail_on and args[1] == self._fail_on:
            raise self._exc
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")


def test_init_commit_sequence(tmp_path):
    r = _FakeRunner()
    assert init_repository(tmp_path, runner=r, message="first") is True
    assert [c[0] for c in r.calls] == [
        ["git", "init"],
        ["git", "add", "."],
        ["git", "commit", "-m", "first"],
    ]
    assert all(cwd == str(tmp_path) for _, cwd in r.calls)


def test_commit_message_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("CREATE_DROID_GIT_COMMIT_MESSAGE", "scaffold")
    r = _FakeRunner()
    init_repository(tmp_path, runner=r)
    assert r.calls[-1][0] == ["git", "commit", "-m", "scaffold"]


def test_failed_commit_is_not_fatal(tmp_path):
    err = subprocess.CalledProcessError(128, ["git", "commit"], stderr="Please tell me who you are")
    r = _FakeRunner(fail_on="commit", exc=err)
    assert init_repository(tmp_path, runner=r) is False


def test_missing_git_binary_is_not_fatal(tmp_path):
    r = _FakeRunner(fail_on="init", exc=FileNotFoundError("git"))
    assert init_repository(tmp_path, runner=r) is False
    assert len(r.calls) == 1
