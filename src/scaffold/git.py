from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from src.scaffold.config import git_commit_message

if TYPE_CHECKING:  # pragma: no cover
    from pathlib import Path

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def run(
        self,
        args: list[str],
        *,
        cwd: str | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]: ...


@dataclass
class SubprocessRunner:
    def run(
        self,
        args: list[str],
        *,
        cwd: str | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            args,
            cwd=cwd,
            text=True,
            capture_output=True,
            check=check,
        )


def init_repository(
    project_path: str | Path,
    *,
    runner: CommandRunner | None = None,
    message: str | None = None,
) -> bool:
    """Best-effort ``git init`` + initial commit. Never raises."""
    r = runner or SubprocessRunner()
    cwd = str(project_path)
    logger.info("Initializing git repository...")
    try:
        r.run(["git", "init"], cwd=cwd)
        r.run(["git", "add", "."], cwd=cwd)
        r.run(["git", "commit", "-m", message or git_commit_message()], cwd=cwd)
    except (OSError, subprocess.CalledProcessError) as exc:
        detail = getattr(exc, "stderr", None) or str(exc)
        logger.warning(
            "Failed to initialize git repository (%s). Run 'git init' manually.",
            str(detail).strip(),
        )
        return False
    logger.info("Git repository initialized.")
    return True
