"""Project tree staging."""

import shutil
from pathlib import Path

from gameci.common.errors import WorkspaceError
from gameci_logging import get_logger

logger = get_logger(__name__)

EXCLUDED_DIRECTORIES = frozenset({".git", ".dagger", ".vscode"})
EXCLUDED_FILES = frozenset(
    {
        ".gitignore",
        ".gitmodules",
        ".DS_Store",
        "dagger.json",
        "go.work",
        "LICENSE",
        "README.md",
    },
)

EXCLUDED_NAMES = EXCLUDED_DIRECTORIES | EXCLUDED_FILES


def prepare_workspace(src: Path, dest: Path) -> Path:
    """Copy a project tree into ``dest`` without repository metadata.

    Only entries at the project root are filtered, whatever their kind: a
    ``.git`` file (worktree or submodule pointer) goes like a ``.git``
    directory. A nested ``README.md`` is part of the project. ``src`` itself is left untouched.

    Parameters
    ----------
    src : Path
        Project root
    dest : Path
        Staging directory; must not exist yet

    Returns
    -------
    Path
        ``dest``

    Raises
    ------
    WorkspaceError
        If ``src`` is not a directory or the copy fails
    """
    src = src.resolve()
    if not src.is_dir():
        msg = f"Project directory does not exist: {src}"
        raise WorkspaceError(msg)

    def ignore(directory: str, names: list[str]) -> set[str]:
        if Path(directory).resolve() != src:
            return set()
        skipped = {name for name in names if name in EXCLUDED_NAMES}
        if skipped:
            logger.debug("Excluding from workspace: %s", ", ".join(sorted(skipped)))
        return skipped

    try:
        shutil.copytree(src, dest, ignore=ignore, symlinks=True)
    except (OSError, shutil.Error) as e:
        msg = f"Cannot stage project {src}: {e}"
        raise WorkspaceError(msg) from e

    return dest
