from tilepuzzle.engine.gameplay.game import GamePlay, apply, direction_toward_empty

__all__ = ["GamePlay", "apply", "direction_toward_empty"]
