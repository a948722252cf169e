import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import numpy as np

from celedog.evolution.genome import Genome
from celedog.evolution.traits import (
    BODY_TYPES,
    COAT_COLORS,
    DEFAULT_CELEBRITY_HEAD,
    EAR_TYPES,
    MARKING_PATTERNS,
    SPECIAL_TRAITS,
    TAIL_TYPES,
    TALENTS,
    TEMPERAMENTS,
)
from celedog.utils.helpers import clamp, hex_to_rgb, random_choice, rgb_to_hex, weighted_random

logger = logging.getLogger(__name__)

INHERIT = 'inherit'
BLEND = 'blend'
MUTATE = 'mutate'


@dataclass
class TraitStrategy:
    """How one gene dimension blends and mutates."""
    blend: Callable[[Any, Any], Any]
    mutate: Callable[[Any, Any], Any]


class GeneticSystem:
    # Per-dimension roll: inherit 50%, blend 40%, mutate 10%
    OUTCOME_WEIGHTS = [(INHERIT, 0.5), (BLEND, 0.4), (MUTATE, 0.1)]
    COLOR_VARIATION = 20
    RANDOM_SPECIAL_TRAIT_CHANCE = 0.05

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.strategies: Dict[str, TraitStrategy] = self._build_strategies()

    def _build_strategies(self) -> Dict[str, TraitStrategy]:
        def catalog(values):
            return lambda a, b: random_choice(values, self.rng)

        return {
            'body_type': TraitStrategy(self._pick_parent, catalog(BODY_TYPES)),
            'coat_color': TraitStrategy(self.blend_colors, catalog(COAT_COLORS)),
            'marking_pattern': TraitStrategy(self._pick_parent, catalog(MARKING_PATTERNS)),
            'marking_color': TraitStrategy(self.blend_colors, catalog(COAT_COLORS)),
            'ear_type': TraitStrategy(self._pick_parent, catalog(EAR_TYPES)),
            'tail_type': TraitStrategy(self._pick_parent, catalog(TAIL_TYPES)),
            # The celebrity head is a reference token; mutation keeps a parent's
            'celebrity_head_id': TraitStrategy(self._pick_parent, self._pick_parent),
            'celebrity_influence': TraitStrategy(
                lambda a, b: clamp((a + b) / 2, 0.0, 1.0),
                lambda a, b: self.rng.random()
            ),
            'temperament': TraitStrategy(self._pick_parent, catalog(TEMPERAMENTS)),
            'talent': TraitStrategy(self._pick_parent, catalog(TALENTS)),
            # Overwritten by synergy detection after the roll
            'special_trait': TraitStrategy(self._pick_parent, lambda a, b: None),
        }

    def breed(self, genes_a: Genome, genes_b: Genome) -> Genome:
        """Combine two parent genomes into offspring genes."""
        offspring = {}

        for dimension in Genome.dimensions():
            value_a = genes_a.get(dimension)
            value_b = genes_b.get(dimension)
            outcome = weighted_random(self.OUTCOME_WEIGHTS, self.rng)

            if outcome == INHERIT:
                offspring[dimension] = self._pick_parent(value_a, value_b)
            elif outcome == BLEND:
                offspring[dimension] = self.strategies[dimension].blend(value_a, value_b)
            else:
                offspring[dimension] = self.strategies[dimension].mutate(value_a, value_b)

        offspring['special_trait'] = None
        genes = Genome(**offspring)
        return genes.with_special_trait(self.check_synergies(genes))

    def _pick_parent(self, value_a: Any, value_b: Any) -> Any:
        return value_a if self.rng.random() < 0.5 else value_b

    def blend_colors(self, color_a: str, color_b: str) -> str:
        """Average two hex colours channel-wise with +/-20 noise per channel."""
        rgb_a = hex_to_rgb(color_a)
        rgb_b = hex_to_rgb(color_b)

        if rgb_a is None or rgb_b is None:
            logger.debug("Cannot blend %r with %r, keeping first colour", color_a, color_b)
            return color_a

        midpoint = (np.array(rgb_a, dtype=float) + np.array(rgb_b, dtype=float)) / 2
        noise = np.array([
            self.rng.uniform(-self.COLOR_VARIATION, self.COLOR_VARIATION) for _ in range(3)
        ])
        channels = np.clip(np.rint(midpoint + noise), 0, 255).astype(int)
        return rgb_to_hex(*channels)

    def check_synergies(self, genes: Genome) -> Optional[str]:
        """Resolve the special trait; the first matching rule wins."""
        if (genes.body_type == 'athletic' and
                genes.temperament == 'sophisticated' and
                genes.celebrity_influence > 0.8):
            return 'redCarpet'

        if genes.temperament == 'goofy' and genes.talent == 'comedy':
            return 'paparazziMagnet'

        if genes.celebrity_influence > 0.85 and genes.marking_pattern != 'solid':
            return 'awardWinner'

        if self.rng.random() < self.RANDOM_SPECIAL_TRAIT_CHANCE:
            return random_choice(SPECIAL_TRAITS, self.rng)

        return None

    def generate_random_genes(self) -> Genome:
        """Random founder genes drawn from the trait catalogs."""
        return Genome(
            body_type=random_choice(BODY_TYPES, self.rng),
            coat_color=random_choice(COAT_COLORS, self.rng),
            marking_pattern=random_choice(MARKING_PATTERNS, self.rng),
            marking_color=random_choice(COAT_COLORS, self.rng),
            ear_type=random_choice(EAR_TYPES, self.rng),
            tail_type=random_choice(TAIL_TYPES, self.rng),
            celebrity_head_id=DEFAULT_CELEBRITY_HEAD,
            celebrity_influence=self.rng.random(),
            temperament=random_choice(TEMPERAMENTS, self.rng),
            talent=random_choice(TALENTS, self.rng),
            special_trait=None
        )
