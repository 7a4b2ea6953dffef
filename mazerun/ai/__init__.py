"""AI layer: adversary movement and reproduction."""

from mazerun.ai.adversary import AdversaryAI, closest_move

__all__ = ["AdversaryAI", "closest_move"]
