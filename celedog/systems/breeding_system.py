import logging
import random
from typing import Any, Dict, Optional

from celedog.config import GameConfig
from celedog.economy.economy_system import EconomySystem
from celedog.entities.dog import CelebrityDog
from celedog.evolution.genetic_system import GeneticSystem
from celedog.evolution.name_generator import NameGenerator
from celedog.evolution.rarity_system import RaritySystem
from celedog.state.game_state import GameState

logger = logging.getLogger(__name__)


class BreedingSystem:
    """
    Runs one breeding attempt end to end against an explicit game state.

    Checks happen in order (parents, self-breeding, funds, kennel space)
    before any gold moves. Once the cost is charged, any failure to commit
    the offspring refunds it, so callers see either the whole breed or no
    change at all.
    """

    def __init__(self, rng: Optional[random.Random] = None, config: Optional[GameConfig] = None):
        self.config = config or GameConfig.get_instance()
        self.rng = rng or random.Random()
        self.economy = EconomySystem(self.config)
        self.genetics = GeneticSystem(self.rng)
        self.rarity = RaritySystem(self.rng)
        self.names = NameGenerator(self.rng, self.config)

    @staticmethod
    def _result(success: bool, message: str, cost: int = 0,
                offspring: Optional[CelebrityDog] = None) -> Dict[str, Any]:
        return {
            'success': success,
            'offspring': offspring,
            'message': message,
            'cost': cost
        }

    def breed(self, parent_a: Optional[CelebrityDog], parent_b: Optional[CelebrityDog],
              state: GameState) -> Dict[str, Any]:
        """
        Breed two owned dogs.

        Args:
            parent_a: First parent
            parent_b: Second parent
            state: Game state to charge and insert into

        Returns:
            Dict with success, offspring (or None), message and cost
        """
        # Validate
        if parent_a is None or parent_b is None:
            return self._result(False, 'Invalid parents selected.')

        if parent_a.id == parent_b.id:
            return self._result(False, 'Cannot breed a dog with itself!')

        # Cost check
        cost = self.economy.calculate_breeding_cost(parent_a, parent_b)
        if not self.economy.can_afford(state, cost):
            logger.info("Breeding %s x %s rejected: need %d gold, have %d",
                        parent_a.name, parent_b.name, cost, state.player['gold'])
            return self._result(
                False, f"Insufficient funds. Need {cost} gold, have {state.player['gold']}.", cost
            )

        # Capacity check
        if state.is_kennel_full():
            return self._result(False, 'Kennel is full! Sell some dogs to make space.', cost)

        # Charge
        transaction = self.economy.process_purchase(state, cost)
        if not transaction['success']:
            return self._result(False, transaction['message'], cost)

        try:
            offspring = self._create_offspring(parent_a, parent_b)
            added = state.add_dog(offspring)
        except ValueError as e:
            logger.exception("Offspring of %s x %s could not be built: %s", parent_a.name, parent_b.name, e)
            added = False

        if not added:
            self.economy.process_sale(state, cost)
            logger.warning("Refunded %d gold after failed commit", cost)
            return self._result(False, 'Failed to add offspring to kennel.', cost)

        self._update_stats(state, offspring)
        state.events.record_birth(offspring, parent_a, parent_b, cost)

        logger.info("%s born (gen %d, %s) from %s x %s for %d gold",
                    offspring.name, offspring.generation, offspring.get_rarity_name(),
                    parent_a.name, parent_b.name, cost)

        return self._result(True, f"{offspring.name} was born! {cost} gold spent.", cost, offspring)

    def _create_offspring(self, parent_a: CelebrityDog, parent_b: CelebrityDog) -> CelebrityDog:
        """Generate, score and name the offspring."""
        genes = self.genetics.breed(parent_a.genes, parent_b.genes)
        generation = max(parent_a.generation, parent_b.generation) + 1
        name = self.names.generate_name(parent_a.name, parent_b.name, genes)

        offspring = CelebrityDog(genes, generation, [parent_a.id, parent_b.id], name, config=self.config)
        offspring.assign_rarity(self.rarity.calculate_rarity(parent_a.rarity, parent_b.rarity, genes))
        return offspring

    @staticmethod
    def _update_stats(state: GameState, offspring: CelebrityDog) -> None:
        stats = state.stats
        stats['total_breeds'] += 1
        stats['rarity_breeds'][offspring.rarity] = stats['rarity_breeds'].get(offspring.rarity, 0) + 1
        if offspring.generation > stats['highest_generation']:
            stats['highest_generation'] = offspring.generation

    def can_breed(self, parent_a: Optional[CelebrityDog], parent_b: Optional[CelebrityDog],
                  state: GameState) -> Dict[str, Any]:
        if parent_a is None or parent_b is None:
            return {'can_breed': False, 'reason': 'Invalid parents'}

        if parent_a.id == parent_b.id:
            return {'can_breed': False, 'reason': 'Cannot breed with self'}

        cost = self.economy.calculate_breeding_cost(parent_a, parent_b)
        if not self.economy.can_afford(state, cost):
            return {'can_breed': False, 'reason': f'Need {cost} gold'}

        if state.is_kennel_full():
            return {'can_breed': False, 'reason': 'Kennel is full'}

        return {'can_breed': True, 'reason': 'Ready to breed'}

    def get_breeding_preview(self, parent_a: Optional[CelebrityDog],
                             parent_b: Optional[CelebrityDog]) -> Optional[Dict[str, Any]]:
        """Cost, generation and rarity odds for a pairing without rolling anything."""
        if parent_a is None or parent_b is None:
            return None

        return {
            'cost': self.economy.calculate_breeding_cost(parent_a, parent_b),
            'expected_generation': max(parent_a.generation, parent_b.generation) + 1,
            # Offspring genes are unknown yet, so no gene bonuses
            'rarity_distribution': self.rarity.get_expected_distribution(parent_a.rarity, parent_b.rarity),
            'parent_names': [parent_a.name, parent_b.name],
            'example_name': NameGenerator.create_portmanteau(parent_a.name, parent_b.name)
        }

    @staticmethod
    def get_dog_breeding_stats(dog_id: str, state: GameState) -> Dict[str, Any]:
        lineage = state.get_lineage(dog_id)
        if lineage is None:
            return {'times_parent': 0, 'offspring': []}

        offspring = [state.get_dog(child_id) for child_id in lineage['children']]
        return {
            'times_parent': len(lineage['children']),
            'offspring': [dog for dog in offspring if dog is not None]
        }
