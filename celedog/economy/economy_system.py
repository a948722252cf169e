import logging
import math
from typing import Any, Dict, Optional, TYPE_CHECKING

import pandas as pd

from celedog.config import GameConfig
from celedog.evolution.rarity_system import RARITY_NAMES

if TYPE_CHECKING:
    from celedog.entities.dog import CelebrityDog
    from celedog.state.game_state import GameState

logger = logging.getLogger(__name__)


class EconomySystem:
    """Prices, breeding costs and the only two ways gold moves: purchase and sale."""

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig.get_instance()

    def calculate_breeding_cost(self, parent_a: 'CelebrityDog', parent_b: 'CelebrityDog') -> int:
        """base * rarity multiplier * (1 + avg generation * generation bonus), floored."""
        avg_rarity = (parent_a.rarity + parent_b.rarity) / 2
        avg_generation = (parent_a.generation + parent_b.generation) / 2

        # Tiers are 1-based; anything off the table costs the base multiplier
        index = math.floor(avg_rarity) - 1
        multipliers = self.config.RARITY_MULTIPLIERS
        rarity_multiplier = multipliers[index] if 0 <= index < len(multipliers) else 1

        generation_multiplier = 1 + avg_generation * self.config.GENERATION_BONUS

        return math.floor(self.config.BREEDING_BASE_COST * rarity_multiplier * generation_multiplier)

    def get_purchase_price(self, rarity: int) -> int:
        prices = self.config.PURCHASE_PRICES
        return prices.get(rarity, prices[1])

    def get_sell_value(self, dog: 'CelebrityDog') -> int:
        return math.floor(self.get_purchase_price(dog.rarity) * self.config.SELL_MULTIPLIER)

    def get_kennel_expansion_cost(self, expansion_level: int) -> Optional[int]:
        """Cost of the next expansion, or None once every expansion is bought."""
        costs = self.config.KENNEL_EXPANSION_COSTS
        if expansion_level >= len(costs):
            return None
        return costs[expansion_level]

    def can_afford(self, state: 'GameState', cost: int) -> bool:
        return state.player['gold'] >= cost

    def process_purchase(self, state: 'GameState', cost: int) -> Dict[str, Any]:
        if not self.can_afford(state, cost):
            return {
                'success': False,
                'message': f"Insufficient funds. Need {cost} gold, have {state.player['gold']}."
            }

        state.player['gold'] -= cost
        logger.debug("Charged %d gold, %d left", cost, state.player['gold'])
        return {
            'success': True,
            'message': f"Purchase successful. {cost} gold spent."
        }

    def process_sale(self, state: 'GameState', value: int) -> Dict[str, Any]:
        state.player['gold'] += value
        logger.debug("Credited %d gold, balance %d", value, state.player['gold'])
        return {
            'success': True,
            'message': f"Sale successful. {value} gold earned."
        }

    def award_gold(self, state: 'GameState', amount: int, reason: str = 'reward') -> Dict[str, Any]:
        state.player['gold'] += amount
        return {
            'success': True,
            'message': f"Earned {amount} gold from {reason}."
        }

    def get_expected_gold_per_minute(self) -> int:
        return self.config.EXPECTED_GOLD_PER_MINUTE

    def get_time_to_afford(self, current_gold: int, cost: int) -> int:
        """Estimated minutes of play before the cost is affordable."""
        if current_gold >= cost:
            return 0
        return math.ceil((cost - current_gold) / self.get_expected_gold_per_minute())

    def get_dog_economics(self, dog: 'CelebrityDog') -> Dict[str, Any]:
        purchase_price = self.get_purchase_price(dog.rarity)
        sell_value = self.get_sell_value(dog)
        profit = sell_value - purchase_price
        return {
            'purchase_price': purchase_price,
            'sell_value': sell_value,
            'profit': profit,
            'profit_margin': f"{profit / purchase_price * 100:.1f}%"
        }

    def get_collection_summary(self, state: 'GameState') -> pd.DataFrame:
        """Count, total value and total sell value of owned dogs per rarity tier."""
        rows = [
            {
                'rarity': dog.rarity,
                'value': dog.value,
                'sell_value': self.get_sell_value(dog)
            }
            for dog in state.get_all_dogs()
        ]
        frame = pd.DataFrame(rows, columns=['rarity', 'value', 'sell_value'])
        summary = frame.groupby('rarity').agg(
            count=('value', 'size'),
            total_value=('value', 'sum'),
            total_sell_value=('sell_value', 'sum')
        )
        summary = summary.reindex(sorted(RARITY_NAMES), fill_value=0)
        summary.insert(0, 'name', [RARITY_NAMES[tier] for tier in summary.index])
        return summary
