import logging
import random
from typing import Optional

from celedog.config import GameConfig
from celedog.evolution.genome import Genome
from celedog.utils.helpers import random_choice, weighted_random

logger = logging.getLogger(__name__)


class NameGenerator:
    """
    Punny celebrity dog names.

    Three strategies are picked by weight: a portmanteau of the parents'
    names, a pun looked up from the offspring's traits, and a synthetic
    name built from syllables or celebrity surnames. Whatever comes back
    empty falls through to a plain combination of the parents' names.
    """

    STRATEGY_WEIGHTS = [('portmanteau', 0.5), ('trait', 0.3), ('synthetic', 0.2)]
    CELEBRITY_PATTERN_CHANCE = 0.7

    PUN_DATABASE = {
        # Body types
        'athletic': ['Pawlympian', 'Fetchival Champion', 'Sporty Spice-paw', 'Ruff Athlete'],
        'fluffy': ['Fluff Daddy', 'Hairy Styles', 'Fur-nando', 'Puffy P. Diddy'],
        'stocky': ['Tank the Bark', 'Bulk Bogan', 'Chonky McPaws'],
        'slim': ['Skinny Minnie Mouse', 'Slim Shaggy', 'Lean Bean'],
        'tiny': ['Lil Bow Wow', 'Tiny Barker', 'Pocket Pup'],

        # Temperaments
        'sophisticated': ['Bark-tisocrat', 'Paws-itively Posh', 'Haute Dog', 'Sir Barksalot'],
        'goofy': ['Derp Doginson', 'Silly Cyrus', 'Goofball Grande', 'Derpina Turner'],
        'playful': ['Bouncy Beyoncé', 'Jumpy Jonas', 'Frisky Fido'],
        'lazy': ['Snoozy Susan', 'Lazy Bones Malone', 'Sleepy McSnore'],
        'energetic': ['Zoomie Zendaya', 'Hyper Hound', 'Zippy Stardust'],

        # Talents
        'singing': ['Pup-erazzi Star', 'Bark Streisand', 'Growl-ie Minogue'],
        'acting': ['Drama Dogma', 'Oscar Wagger', 'Meryl Streep-er'],
        'sports': ['Paws Jordan', 'Fetch Armstrong', 'Serena Woofliams'],
        'comedy': ['Jim Furry', 'Kevin Bark', 'Tina Fido'],
        'modeling': ['Bark Moss', 'Gisele Barkchen', 'Tyra Barks'],
    }

    SYLLABLES = {
        'start': ['Bark', 'Woof', 'Paw', 'Fur', 'Ruff', 'Howl', 'Fetch', 'Sniff', 'Wag'],
        'middle': ['y', 'ie', 'ster', 'meister', 'ington', 'worth', 'field'],
        'end': ['son', 'ton', 'ley', 'bert', 'ford', 'wood', 'stone'],
    }

    CELEBRITY_SURNAMES = [
        'Wahlberg', 'Obama', 'Jagger', 'Styles', 'Grande', 'Swift',
        'Bieber', 'Cruise', 'Pitt', 'Jolie', 'Streep', 'DiCaprio'
    ]

    STARTER_NAMES = [
        'Bark Wahlberg', 'Sarah Jessica Barker', 'Chew-barka', 'Pupcasso',
        'Bark Obama', 'Fluff Daddy', 'Hairy Styles', 'Lick Jagger',
        'Droolius Caesar', 'Winona Ruffer', 'Brad Pittbull', 'Jennifer Paw-niston',
        'George Sniff-ney', 'Bark Ruffalo', 'Natalie Pawrtman', 'Chris Prrratt',
        'Scarlett Yo-hound-son', 'Ryan Pawsling', 'Emma Bone', 'Tom Paws'
    ]

    def __init__(self, rng: Optional[random.Random] = None, config: Optional[GameConfig] = None):
        self.rng = rng or random.Random()
        self.config = config or GameConfig.get_instance()

    def generate_name(self, name_a: str, name_b: str, genes: Genome) -> str:
        """Name an offspring from its parents' names and its genes."""
        method = weighted_random(self.STRATEGY_WEIGHTS, self.rng)

        if method == 'portmanteau':
            name = self.create_portmanteau(name_a, name_b)
        elif method == 'trait':
            name = self.create_trait_based_pun(genes)
        else:
            name = self.create_synthetic_name()

        if not name or not name.strip():
            name = self.create_simple_combination(name_a, name_b)

        # Length is reported, not enforced
        if not self.is_valid_name(name):
            logger.warning("Generated name %r exceeds %d characters", name, self.config.MAX_NAME_LENGTH)

        return name

    @staticmethod
    def create_portmanteau(name_a: str, name_b: str) -> str:
        """First half of A's first word joined to the second half of B's last word."""
        if not name_a or not name_b:
            return 'Unnamed Pup'

        word_a = name_a.split(' ')[0]
        word_b = name_b.split(' ')[-1]

        return word_a[:len(word_a) // 2] + word_b[len(word_b) // 2:]

    def create_trait_based_pun(self, genes: Genome) -> Optional[str]:
        candidates = []
        for trait in (genes.body_type, genes.temperament, genes.talent):
            candidates.extend(self.PUN_DATABASE.get(trait, []))

        return random_choice(candidates, self.rng) if candidates else None

    def create_synthetic_name(self) -> str:
        """Celebrity-surname pattern (70%) or three stitched syllables (30%)."""
        if self.rng.random() < self.CELEBRITY_PATTERN_CHANCE:
            prefix = random_choice(self.SYLLABLES['start'], self.rng)
            celeb = random_choice(self.CELEBRITY_SURNAMES, self.rng)
            return f"{prefix} {celeb}"

        start = random_choice(self.SYLLABLES['start'], self.rng)
        middle = random_choice(self.SYLLABLES['middle'], self.rng)
        end = random_choice(self.SYLLABLES['end'], self.rng)
        return start + middle + end

    @staticmethod
    def create_simple_combination(name_a: str, name_b: str) -> str:
        if not name_a or not name_b:
            return 'Mystery Pup'

        return f"{name_a.split(' ')[0]} {name_b.split(' ')[-1]}"

    def get_random_starter_name(self) -> str:
        return random_choice(self.STARTER_NAMES, self.rng)

    def is_valid_name(self, name: Optional[str]) -> bool:
        if not isinstance(name, str):
            return False
        if not name.strip():
            return False
        return len(name) <= self.config.MAX_NAME_LENGTH
