"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

from fitdesk.core.storage import HistoryStore, JsonFileStore


@dataclass
class CLIState:
    """Output options, loaded configuration and the storage location."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console
    storage_path: Path

    def history_store(self) -> HistoryStore:
        return HistoryStore(JsonFileStore(self.storage_path))
