from typing import Dict, Any, Optional
import json
import logging
import os

logger = logging.getLogger(__name__)


class GameConfig:
    _instance = None

    def __init__(self, config_path: Optional[str] = None):
        # Economy
        self.STARTING_GOLD = 1000
        self.BREEDING_BASE_COST = 100
        self.RARITY_MULTIPLIERS = [1, 2, 5, 10, 20]
        self.GENERATION_BONUS = 0.15
        self.SELL_MULTIPLIER = 0.5
        self.PURCHASE_PRICES = {1: 500, 2: 2000, 3: 10000, 4: 40000, 5: 150000}
        self.DEFAULT_DOG_VALUE = 500
        self.KENNEL_EXPANSION_COSTS = [1000, 2500, 5000, 10000]
        self.EXPECTED_GOLD_PER_MINUTE = 40

        # Kennel
        self.DEFAULT_CAPACITY = 10
        self.MAX_CAPACITY = 50
        self.EXPANSION_STEP = 10

        # Naming
        self.MAX_NAME_LENGTH = 50

        # Saves
        self.SAVE_VERSION = '1.0.0'
        self.SAVE_PATH = 'celedog_save.json'
        self.MAX_SAVE_BYTES = 5_000_000

        self.config_path = config_path or os.environ.get('CELEDOG_CONFIG', 'config.json')
        self._load_config()

    @classmethod
    def get_instance(cls) -> 'GameConfig':
        if cls._instance is None:
            cls._instance = GameConfig()
        return cls._instance

    def _load_config(self):
        try:
            if os.path.exists(self.config_path):
                with open(self.config_path, 'r') as f:
                    config_data = json.load(f)
                    self.update(config_data)
        except (OSError, ValueError) as e:
            logger.warning("Error loading config %s: %s", self.config_path, e)

    def update(self, config_data: Dict[str, Any]) -> None:
        """Apply overrides, keeping tier-keyed tables keyed by int."""
        for key, value in config_data.items():
            if key == 'PURCHASE_PRICES':
                value = {int(tier): int(price) for tier, price in value.items()}
            setattr(self, key, value)
