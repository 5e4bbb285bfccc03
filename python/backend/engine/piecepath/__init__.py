from backend.engine.piecepath.builder import NECK_RATIO, TAB_RATIO, OutlineBuilder

__all__ = ["NECK_RATIO", "TAB_RATIO", "OutlineBuilder"]
