"""Editor version lookup and image selection."""

from pathlib import Path

from gameci.common.errors import VersionResolutionError

VERSION_FILE = Path("ProjectSettings") / "ProjectVersion.txt"
SEPARATOR = ": "


def resolve_editor_version(workspace: Path) -> str:
    """Read the editor version recorded by the project.

    The first line of ``ProjectSettings/ProjectVersion.txt`` looks like
    ``m_EditorVersion: 2021.3.5f1``; the part after ``": "`` is returned as-is.

    Raises
    ------
    VersionResolutionError
        If the file is missing or unreadable, or the first line has no separator
    """
    path = workspace / VERSION_FILE
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read {VERSION_FILE}: {e}"
        raise VersionResolutionError(msg) from e

    first_line = content.split("\n")[0].rstrip("\r")
    parts = first_line.split(SEPARATOR)
    if len(parts) < 2:
        msg = f"No {SEPARATOR.strip()!r} separator in first line of {VERSION_FILE}: {first_line!r}"
        raise VersionResolutionError(msg)

    return parts[1].strip()


def editor_image(
    repository: str,
    os_name: str,
    version: str,
    platform: str,
    toolchain: str,
) -> str:
    """Build the editor image reference ``<repo>:<os>-<version>-<platform>-<toolchain>``."""
    return f"{repository}:{os_name}-{version}-{platform}-{toolchain}"
