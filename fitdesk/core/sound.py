"""Fire-and-forget audio cues for session transitions."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

CUES = ("start", "complete")

CuePlayer = Callable[[str], None]


def _player_command(player: str) -> Optional[List[str]]:
    if player and player != "auto":
        return player.split()
    if sys.platform == "darwin":
        return ["afplay"]
    for candidate in ("paplay", "aplay"):
        if shutil.which(candidate):
            return [candidate]
    return None


def play_cue(cue: str, config: Optional[Dict[str, Any]] = None) -> None:
    """Play the sound configured for a cue without waiting for it.

    Failures never propagate; a missing player or sound file only logs.
    """
    if cue not in CUES:
        logger.debug("Unknown sound cue %r", cue)
        return

    sound_cfg = (config or {}).get("sound", {})
    if not sound_cfg.get("enabled", True):
        return

    sound_path = sound_cfg.get(cue)
    command = _player_command(str(sound_cfg.get("player") or "auto"))
    if not sound_path or command is None:
        logger.debug("No player or sound configured for cue %r", cue)
        return

    try:
        subprocess.Popen(
            [*command, str(sound_path)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as exc:
        logger.debug("Could not play %s cue: %s", cue, exc)


def make_cue_player(config: Optional[Dict[str, Any]] = None) -> CuePlayer:
    """Bind config into a single-argument cue callback for sessions."""

    def _play(cue: str) -> None:
        play_cue(cue, config)

    return _play
