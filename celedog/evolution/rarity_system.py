import math
import random
from typing import Dict, List, Optional

import numpy as np

from celedog.evolution.genome import Genome
from celedog.utils.helpers import clamp, weighted_random

COMMON = 1
UNCOMMON = 2
RARE = 3
EPIC = 4
LEGENDARY = 5

RARITY_NAMES = {
    COMMON: 'Common',
    UNCOMMON: 'Uncommon',
    RARE: 'Rare',
    EPIC: 'Epic',
    LEGENDARY: 'Legendary'
}

RARITY_COLORS = {
    COMMON: 0xCCCCCC,     # Gray
    UNCOMMON: 0x00FF00,   # Green
    RARE: 0x0066FF,       # Blue
    EPIC: 0x9933FF,       # Purple
    LEGENDARY: 0xFFAA00   # Gold
}

# Shop-facing odds of finding each tier
TIER_PROBABILITIES = {
    COMMON: 0.60,
    UNCOMMON: 0.25,
    RARE: 0.12,
    EPIC: 0.025,
    LEGENDARY: 0.005
}


class RaritySystem:
    """
    Scores offspring rarity from parent rarities and offspring genes.

    The roll has three branches: ``floor`` keeps the base value (rounded
    down), while ``plus_one`` and ``plus_two`` both round up before adding,
    so upward surprises are far more common than downward ones.
    """

    BRANCHES = [('floor', 0.55), ('plus_one', 0.35), ('plus_two', 0.10)]
    SPECIAL_TRAIT_BONUS = 1.0
    HIGH_INFLUENCE_BONUS = 0.5
    HIGH_INFLUENCE_THRESHOLD = 0.8

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def base_rarity(self, rarity_a: float, rarity_b: float,
                    has_special_trait: bool, high_influence: bool) -> float:
        bonus = 0.0
        if has_special_trait:
            bonus += self.SPECIAL_TRAIT_BONUS
        if high_influence:
            bonus += self.HIGH_INFLUENCE_BONUS
        return (rarity_a + rarity_b) / 2 + bonus

    @staticmethod
    def _apply_branch(branch: str, base: float) -> int:
        if branch == 'floor':
            value = math.floor(base)
        elif branch == 'plus_one':
            value = math.ceil(base) + 1
        else:
            value = math.ceil(base) + 2
        return int(clamp(round(value), COMMON, LEGENDARY))

    def calculate_rarity(self, rarity_a: float, rarity_b: float, genes: Genome) -> int:
        """
        Roll the rarity tier for an offspring.

        Args:
            rarity_a: First parent's tier (1-5)
            rarity_b: Second parent's tier (1-5)
            genes: Offspring genes, read for the special-trait and influence bonuses

        Returns:
            Tier in 1..5
        """
        base = self.base_rarity(
            rarity_a, rarity_b,
            genes.special_trait is not None,
            genes.celebrity_influence > self.HIGH_INFLUENCE_THRESHOLD
        )
        branch = weighted_random(self.BRANCHES, self.rng)
        return self._apply_branch(branch, base)

    def get_expected_distribution(self, rarity_a: float, rarity_b: float,
                                  has_special_trait: bool = False,
                                  high_influence: bool = False) -> Dict[str, Dict[str, float]]:
        """Branch outcomes and their fixed probabilities; consumes no randomness."""
        base = self.base_rarity(rarity_a, rarity_b, has_special_trait, high_influence)
        return {
            branch: {'probability': probability, 'tier': self._apply_branch(branch, base)}
            for branch, probability in self.BRANCHES
        }

    def sample_distribution(self, rarity_a: float, rarity_b: float, genes: Genome,
                            trials: int = 1000) -> Dict[int, float]:
        """Monte-Carlo frequency of each tier over repeated rolls."""
        if trials <= 0:
            raise ValueError("trials must be positive")
        rolls = np.array([self.calculate_rarity(rarity_a, rarity_b, genes) for _ in range(trials)])
        counts = np.bincount(rolls, minlength=LEGENDARY + 1)
        return {tier: float(counts[tier]) / trials for tier in RARITY_NAMES}

    @staticmethod
    def get_rarity_name(rarity: int) -> str:
        return RARITY_NAMES.get(rarity, 'Unknown')

    @staticmethod
    def get_rarity_color(rarity: int) -> int:
        return RARITY_COLORS.get(rarity, RARITY_COLORS[COMMON])

    @staticmethod
    def get_all_rarities() -> List[Dict]:
        return [
            {
                'tier': tier,
                'name': RARITY_NAMES[tier],
                'color': RARITY_COLORS[tier],
                'probability': TIER_PROBABILITIES[tier]
            }
            for tier in sorted(RARITY_NAMES)
        ]
