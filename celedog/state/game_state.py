import logging
from typing import Any, Dict, List, Optional

from celedog.config import GameConfig
from celedog.entities.dog import CelebrityDog
from celedog.events.event_manager import EventManager
from celedog.evolution.lineage_manager import LineageManager
from celedog.evolution.rarity_system import RARITY_NAMES

logger = logging.getLogger(__name__)


class GameState:
    """
    One player's kennel: gold, capacity, owned dogs, pedigree and statistics.

    Passed explicitly to every breeding, shop and save operation; there is no
    process-wide instance.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig.get_instance()
        self.reset()

    def reset(self) -> None:
        self.player = {
            'gold': self.config.STARTING_GOLD,
            'kennel_capacity': self.config.DEFAULT_CAPACITY,
            'expansion_level': 0
        }
        self.dogs: Dict[str, CelebrityDog] = {}
        self.lineage = LineageManager()
        self.settings = {
            'sound_enabled': True,
            'music_enabled': True,
            'tutorial_completed': False
        }
        self.stats = {
            'total_breeds': 0,
            'total_sold': 0,
            'highest_generation': 0,
            'rarity_breeds': {tier: 0 for tier in RARITY_NAMES}
        }
        self.events = EventManager()

    @property
    def gold(self) -> int:
        return self.player['gold']

    def add_gold(self, amount: int) -> None:
        self.player['gold'] += amount

    def spend_gold(self, amount: int) -> bool:
        if self.player['gold'] >= amount:
            self.player['gold'] -= amount
            return True
        return False

    def add_dog(self, dog: CelebrityDog) -> bool:
        """Insert a dog; refused when the kennel is already full."""
        if self.is_kennel_full():
            logger.info("Kennel full (%d/%d), rejected %s",
                        len(self.dogs), self.player['kennel_capacity'], dog.name)
            return False

        self.dogs[dog.id] = dog
        self.lineage.add_dog(dog)

        if dog.generation > self.stats['highest_generation']:
            self.stats['highest_generation'] = dog.generation

        return True

    def remove_dog(self, dog_id: str) -> bool:
        """Drop a dog from the kennel. Its pedigree entry stays for ancestry queries."""
        return self.dogs.pop(dog_id, None) is not None

    def get_dog(self, dog_id: str) -> Optional[CelebrityDog]:
        return self.dogs.get(dog_id)

    def get_all_dogs(self) -> List[CelebrityDog]:
        return list(self.dogs.values())

    def get_lineage(self, dog_id: str) -> Optional[Dict[str, List[str]]]:
        return self.lineage.get_lineage(dog_id)

    def is_kennel_full(self) -> bool:
        return len(self.dogs) >= self.player['kennel_capacity']

    def get_kennel_usage(self) -> Dict[str, int]:
        return {
            'current': len(self.dogs),
            'max': self.player['kennel_capacity']
        }

    def serialize(self) -> Dict[str, Any]:
        return {
            'player': dict(self.player),
            'dogs': [dog.serialize() for dog in self.dogs.values()],
            'lineage': self.lineage.serialize(),
            'settings': dict(self.settings),
            'stats': {
                'total_breeds': self.stats['total_breeds'],
                'total_sold': self.stats['total_sold'],
                'highest_generation': self.stats['highest_generation'],
                # JSON object keys are strings
                'rarity_breeds': {str(tier): count for tier, count in self.stats['rarity_breeds'].items()}
            }
        }

    @classmethod
    def deserialize(cls, data: Dict[str, Any], config: Optional[GameConfig] = None) -> 'GameState':
        state = cls(config)
        state.player.update(data['player'])

        for dog_data in data['dogs']:
            dog = CelebrityDog.deserialize(dog_data, config=state.config)
            state.dogs[dog.id] = dog

        state.lineage = LineageManager.deserialize(data.get('lineage', []))
        # Dogs missing from a saved pedigree still get linked
        for dog in state.dogs.values():
            state.lineage.add_dog(dog)

        state.settings.update(data.get('settings', {}))

        stats = data.get('stats', {})
        for key in ('total_breeds', 'total_sold', 'highest_generation'):
            if key in stats:
                state.stats[key] = stats[key]
        for tier, count in stats.get('rarity_breeds', {}).items():
            state.stats['rarity_breeds'][int(tier)] = count

        return state
