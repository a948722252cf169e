from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from celedog.config import GameConfig
from celedog.entities.dog import CelebrityDog
from celedog.utils.helpers import REQUIRED_GENE_FIELDS

STARTER_DOGS_CSV = Path(__file__).parent / 'starter_dogs.csv'


def load_starter_dogs(path: Optional[str] = None) -> pd.DataFrame:
    """Load the founder catalog, one row per shop dog."""
    df = pd.read_csv(path or STARTER_DOGS_CSV)
    df['rarity'] = df['rarity'].astype(int)
    df['celebrityInfluence'] = df['celebrityInfluence'].astype(float)
    return df


def starter_config_from_row(row: pd.Series) -> Dict[str, Any]:
    """Turn a catalog row into the {'name', 'rarity', 'genes'} shape used by the shop."""
    genes = {field: row[field] for field in REQUIRED_GENE_FIELDS}
    genes['celebrityInfluence'] = float(genes['celebrityInfluence'])

    special_trait = row.get('specialTrait')
    genes['specialTrait'] = None if pd.isna(special_trait) else str(special_trait)

    return {
        'name': str(row['name']),
        'rarity': int(row['rarity']),
        'genes': genes
    }


def get_starter_catalog(path: Optional[str] = None) -> List[Dict[str, Any]]:
    return [starter_config_from_row(row) for _, row in load_starter_dogs(path).iterrows()]


def create_starter_from_row(row: pd.Series, config: Optional[GameConfig] = None) -> CelebrityDog:
    return CelebrityDog.create_starter(starter_config_from_row(row), config=config)
