from pathlib import Path


def find_alloy_root(workspace_root: Path) -> Path | None:
    """
    Find the Alloy project directory within a workspace.

    Searches for the directory containing `tiapp.xml` and an `app` folder.

    Args:
        workspace_root: The workspace root path

    Returns:
        Path to the project root, or None if not found
    """
    if is_alloy_root(workspace_root):
        return workspace_root

    # Check common locations first
    common_locations = ["app", "mobile", "client", "titanium"]

    for location in common_locations:
        candidate = workspace_root / location
        if is_alloy_root(candidate):
            return candidate

    # Fallback: search subdirectories (max depth 3)
    for candidate in _search_subdirectories(workspace_root, max_depth=3):
        if is_alloy_root(candidate):
            return candidate

    return None


def is_alloy_root(path: Path) -> bool:
    """
    Check if a path is an Alloy project root.

    A valid project root must contain:
    - tiapp.xml file
    - app/ directory
    """
    if not path.is_dir():
        return False

    if not (path / "tiapp.xml").is_file():
        return False

    return (path / "app").is_dir()


def find_app_dir(document_path: Path | None, project_root: Path | None = None) -> Path | None:
    """
    Return the Alloy `app` directory a document belongs to.

    Walks up from the document to the nearest ancestor named `app`, then
    falls back to `<project_root>/app`.
    """
    if document_path is not None:
        for parent in document_path.parents:
            if parent.name == "app":
                return parent

    if project_root is not None and (project_root / "app").is_dir():
        return project_root / "app"

    return None


def _search_subdirectories(root: Path, max_depth: int = 3) -> list[Path]:
    """
    Recursively search subdirectories up to max_depth.

    Returns list of candidate directories.
    """
    candidates = []

    def _recurse(path: Path, depth: int):
        if depth > max_depth:
            return

        try:
            for item in path.iterdir():
                if item.is_dir() and not item.name.startswith(".") and item.name != "node_modules":
                    candidates.append(item)
                    _recurse(item, depth + 1)
        except PermissionError:
            pass

    _recurse(root, 1)
    return candidates
