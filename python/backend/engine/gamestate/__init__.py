from backend.engine.gamestate.state import GameSession, Phase, SessionSnapshot, format_time

__all__ = ["GameSession", "Phase", "SessionSnapshot", "format_time"]
