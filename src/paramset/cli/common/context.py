"""Application context management for the CLI."""

from dataclasses import dataclass
from pathlib import Path

from paramset.cli.common.exits import die
from paramset.core.adapters.filestore import JsonFileHost
from paramset.core.config import state_dir as default_state_dir


@dataclass
class AppContext:
    """Application context holding the host store used by every command."""

    state_dir: Path
    host: JsonFileHost


def build_context(state_dir: Path | None) -> AppContext:
    """Build the application context over the JSON file store.

    Args:
        state_dir: Store root; falls back to the configured default.

    Returns:
        AppContext: Context with a ready host adapter.
    """
    root = Path(state_dir) if state_dir else default_state_dir()
    if root.exists() and not root.is_dir():
        die(f"State directory {root} is not a directory", code=2)
    return AppContext(state_dir=root, host=JsonFileHost(root))
