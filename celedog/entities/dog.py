from typing import Any, Dict, List, Optional, Union

from celedog.config import GameConfig
from celedog.evolution.genome import Genome
from celedog.evolution.rarity_system import RARITY_NAMES
from celedog.utils.helpers import format_duration, generate_uuid, now_ms


class CelebrityDog:
    #########################
    # 1. Initialization
    #########################
    def __init__(self, genes: Union[Genome, Dict[str, Any]], generation: int = 0,
                 parent_ids: Optional[List[str]] = None, name: str = '',
                 config: Optional[GameConfig] = None):
        """Create a dog; raises ValueError if the genes or pedigree are malformed."""
        if isinstance(genes, dict):
            genes = Genome.from_dict(genes)
        elif not isinstance(genes, Genome):
            raise ValueError("Invalid genes structure")

        parent_ids = list(parent_ids or [])
        if len(parent_ids) not in (0, 2):
            raise ValueError(f"A dog has either no parents or two, got {len(parent_ids)}")
        if isinstance(generation, bool) or not isinstance(generation, int) or generation < 0:
            raise ValueError(f"Generation must be a non-negative integer, got {generation!r}")

        self.config = config or GameConfig.get_instance()
        self.id = generate_uuid()
        self.genes = genes
        self.generation = generation
        self.parent_ids = parent_ids
        self.birth_time = now_ms()
        self.name = name

        # Bred dogs get their real rarity from the rarity system after construction
        self.rarity = 1
        self.value = self.calculate_value()

    @classmethod
    def create_starter(cls, starter: Dict[str, Any], config: Optional[GameConfig] = None) -> 'CelebrityDog':
        """Founding-stock dog (generation 0, no parents) with a preset rarity."""
        dog = cls(starter['genes'], 0, [], starter['name'], config=config)
        if starter.get('rarity'):
            dog.assign_rarity(int(starter['rarity']))
        return dog

    #########################
    # 2. Derived values
    #########################
    def assign_rarity(self, rarity: int) -> None:
        self.rarity = rarity
        self.value = self.calculate_value()

    def calculate_value(self) -> int:
        return self.config.PURCHASE_PRICES.get(self.rarity, self.config.DEFAULT_DOG_VALUE)

    def get_sell_value(self) -> int:
        return int(self.value * self.config.SELL_MULTIPLIER)

    def get_age(self) -> int:
        """Age in milliseconds."""
        return now_ms() - self.birth_time

    def get_age_string(self) -> str:
        return format_duration(self.get_age())

    def get_rarity_name(self) -> str:
        return RARITY_NAMES.get(self.rarity, 'Unknown')

    def has_parents(self) -> bool:
        return len(self.parent_ids) > 0

    def has_special_trait(self) -> bool:
        return self.genes.special_trait is not None

    def get_summary(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'rarity': self.get_rarity_name(),
            'generation': self.generation,
            'age': self.get_age_string(),
            'value': self.value,
            'sell_value': self.get_sell_value(),
            'has_parents': self.has_parents(),
            'has_special_trait': self.has_special_trait(),
            'body_type': self.genes.body_type,
            'temperament': self.genes.temperament,
            'talent': self.genes.talent
        }

    #########################
    # 3. Serialization
    #########################
    def serialize(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'genes': self.genes.to_dict(),
            'generation': self.generation,
            'parentIds': list(self.parent_ids),
            'birthTime': self.birth_time,
            'name': self.name,
            'rarity': self.rarity,
            'value': self.value
        }

    @classmethod
    def deserialize(cls, data: Dict[str, Any], config: Optional[GameConfig] = None) -> 'CelebrityDog':
        """Restore a dog exactly as saved; rarity and value are not recomputed."""
        dog = cls(data['genes'], data['generation'], data['parentIds'], data['name'], config=config)
        dog.id = data['id']
        dog.birth_time = data['birthTime']
        dog.rarity = data['rarity']
        dog.value = data['value']
        return dog

    def __repr__(self) -> str:
        return f"CelebrityDog(id={self.id!r}, name={self.name!r}, generation={self.generation}, rarity={self.rarity})"
