from backend.engine.piecepattern.pattern import PatternGenerator

__all__ = ["PatternGenerator"]
