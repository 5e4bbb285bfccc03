from backend.engine.gamechoices.choices import ChoiceBuilder, RandomSource

__all__ = ["ChoiceBuilder", "RandomSource"]
