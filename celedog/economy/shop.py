import logging
from typing import Any, Dict, Optional

from celedog.config import GameConfig
from celedog.economy.economy_system import EconomySystem
from celedog.entities.dog import CelebrityDog
from celedog.state.game_state import GameState
from celedog.utils.helpers import format_number

logger = logging.getLogger(__name__)


class ShopSystem:
    """Buying founders, selling dogs and expanding the kennel."""

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig.get_instance()
        self.economy = EconomySystem(self.config)

    def buy_dog(self, state: GameState, starter: Dict[str, Any]) -> Dict[str, Any]:
        """
        Buy a founder dog from the catalog.

        Args:
            state: Game state to charge and insert into
            starter: Catalog entry with 'name', 'rarity' and 'genes'

        Returns:
            Dict with success, dog (or None) and message
        """
        price = self.economy.get_purchase_price(starter.get('rarity', 1))

        if not self.economy.can_afford(state, price):
            return {'success': False, 'dog': None,
                    'message': f"Not enough gold! Need {format_number(price)}."}

        if state.is_kennel_full():
            return {'success': False, 'dog': None,
                    'message': 'Kennel is full! Sell some dogs first.'}

        # Build before charging so a bad catalog entry costs nothing
        dog = CelebrityDog.create_starter(starter, config=self.config)

        transaction = self.economy.process_purchase(state, price)
        if not transaction['success']:
            return {'success': False, 'dog': None, 'message': transaction['message']}

        if not state.add_dog(dog):
            self.economy.process_sale(state, price)
            return {'success': False, 'dog': None, 'message': 'Failed to add dog to kennel.'}

        state.events.record_purchase(dog, price)
        logger.info("Purchased %s for %d gold", dog.name, price)
        return {'success': True, 'dog': dog, 'message': f"Purchased {dog.name}!"}

    def sell_dog(self, state: GameState, dog_id: str) -> Dict[str, Any]:
        dog = state.get_dog(dog_id)
        if dog is None:
            return {'success': False, 'value': 0, 'message': 'Dog not found.'}

        value = self.economy.get_sell_value(dog)
        self.economy.process_sale(state, value)
        state.remove_dog(dog_id)
        state.stats['total_sold'] += 1
        state.events.record_sale(dog, value)

        logger.info("Sold %s for %d gold", dog.name, value)
        return {'success': True, 'value': value,
                'message': f"Sold {dog.name} for {format_number(value)} gold!"}

    def expand_kennel(self, state: GameState) -> Dict[str, Any]:
        level = state.player['expansion_level']
        cost = self.economy.get_kennel_expansion_cost(level)

        if cost is None or state.player['kennel_capacity'] >= self.config.MAX_CAPACITY:
            return {'success': False, 'cost': 0, 'message': 'Kennel is already at maximum size.'}

        transaction = self.economy.process_purchase(state, cost)
        if not transaction['success']:
            return {'success': False, 'cost': cost, 'message': transaction['message']}

        state.player['kennel_capacity'] = min(
            state.player['kennel_capacity'] + self.config.EXPANSION_STEP,
            self.config.MAX_CAPACITY
        )
        state.player['expansion_level'] = level + 1

        return {'success': True, 'cost': cost,
                'message': f"Kennel expanded to {state.player['kennel_capacity']} spaces."}
