from backend.engine.gameplay.game import (
    COMPLETE_DELAY_MS,
    PREVIEW_TIME,
    TICK_MS,
    WRONG_MARKER_MS,
    GamePlay,
)

__all__ = ["COMPLETE_DELAY_MS", "PREVIEW_TIME", "TICK_MS", "WRONG_MARKER_MS", "GamePlay"]
