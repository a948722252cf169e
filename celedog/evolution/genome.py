from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from celedog.utils.helpers import REQUIRED_GENE_FIELDS, validate_genes

# Python attribute -> key used in serialized dog records
GENE_KEYS = {
    'body_type': 'bodyType',
    'coat_color': 'coatColor',
    'marking_pattern': 'markingPattern',
    'marking_color': 'markingColor',
    'ear_type': 'earType',
    'tail_type': 'tailType',
    'celebrity_head_id': 'celebrityHeadId',
    'celebrity_influence': 'celebrityInfluence',
    'temperament': 'temperament',
    'talent': 'talent',
    'special_trait': 'specialTrait',
}


@dataclass(frozen=True)
class Genome:
    """The full set of trait values that defines a dog."""
    body_type: str
    coat_color: str
    marking_pattern: str
    marking_color: str
    ear_type: str
    tail_type: str
    celebrity_head_id: str
    celebrity_influence: float
    temperament: str
    talent: str
    special_trait: Optional[str] = None

    def __post_init__(self):
        influence = self.celebrity_influence
        if isinstance(influence, bool) or not isinstance(influence, (int, float)):
            raise ValueError(f"celebrity_influence must be a number, got {influence!r}")
        if not 0.0 <= influence <= 1.0:
            raise ValueError(f"celebrity_influence must be in [0, 1], got {influence}")
        object.__setattr__(self, 'celebrity_influence', float(influence))

    @classmethod
    def dimensions(cls):
        """Attribute names of every gene dimension, in record order."""
        return [f.name for f in fields(cls)]

    def get(self, dimension: str) -> Any:
        return getattr(self, dimension)

    def with_special_trait(self, special_trait: Optional[str]) -> 'Genome':
        return replace(self, special_trait=special_trait)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase gene record."""
        return {GENE_KEYS[name]: getattr(self, name) for name in self.dimensions()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Genome':
        """Build a genome from a gene record, rejecting incomplete ones."""
        if not validate_genes(data):
            missing = [key for key in REQUIRED_GENE_FIELDS if not isinstance(data, dict) or key not in data]
            raise ValueError(f"Invalid genes structure, missing: {', '.join(missing)}")

        values = {name: data[key] for name, key in GENE_KEYS.items() if key in data}
        values.setdefault('special_trait', None)
        return cls(**values)
