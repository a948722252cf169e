from collections import deque
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from celedog.entities.dog import CelebrityDog


ANCESTOR_LABELS = {
    0: 'self',
    1: 'parent',
    2: 'grandparent',
    3: 'great-grandparent',
    4: 'great-great-grandparent'
}

DESCENDANT_LABELS = {
    0: 'self',
    1: 'child',
    2: 'grandchild',
    3: 'great-grandchild'
}


class LineageManager:
    """Pedigree of dog ids: dog id -> {'parents': [...], 'children': [...]}."""

    def __init__(self):
        self.pedigree: Dict[str, Dict[str, List[str]]] = {}

    def add_dog(self, dog: 'CelebrityDog') -> None:
        """Register a dog and link it under its parents. Safe to repeat."""
        if dog.id not in self.pedigree:
            self.pedigree[dog.id] = {
                'parents': list(dog.parent_ids),
                'children': []
            }

        for parent_id in dog.parent_ids:
            if parent_id not in self.pedigree:
                self.pedigree[parent_id] = {'parents': [], 'children': [dog.id]}
            else:
                children = self.pedigree[parent_id]['children']
                if dog.id not in children:
                    children.append(dog.id)

    def _walk(self, dog_id: str, max_depth: int, edge: str) -> Iterable[tuple]:
        """Breadth-first walk along one edge type, visiting each id once."""
        queue = deque([(dog_id, 0)])
        visited = set()

        while queue:
            current_id, depth = queue.popleft()
            if current_id in visited:
                continue
            visited.add(current_id)

            entry = self.pedigree.get(current_id)
            if entry is None:
                continue

            yield current_id, depth, entry

            if depth >= max_depth:
                continue

            for next_id in entry[edge]:
                queue.append((next_id, depth + 1))

    def get_ancestry(self, dog_id: str, max_depth: int = 3) -> List[Dict]:
        return [
            {
                'id': current_id,
                'depth': depth,
                'relationship': self.get_relationship(depth),
                'parents': list(entry['parents']),
                'children': list(entry['children'])
            }
            for current_id, depth, entry in self._walk(dog_id, max_depth, 'parents')
        ]

    def get_descendants(self, dog_id: str, max_depth: int = 3) -> List[Dict]:
        return [
            {
                'id': current_id,
                'depth': depth,
                'relationship': self.get_descendant_relationship(depth)
            }
            for current_id, depth, _ in self._walk(dog_id, max_depth, 'children')
        ]

    def are_related(self, dog_a_id: str, dog_b_id: str, max_depth: int = 5) -> bool:
        """True when the two ancestries (each including the dog itself) overlap."""
        ancestors_a = {a['id'] for a in self.get_ancestry(dog_a_id, max_depth)}
        ancestors_b = {a['id'] for a in self.get_ancestry(dog_b_id, max_depth)}
        return not ancestors_a.isdisjoint(ancestors_b)

    @staticmethod
    def get_relationship(depth: int) -> str:
        return ANCESTOR_LABELS.get(depth, f'ancestor ({depth} generations)')

    @staticmethod
    def get_descendant_relationship(depth: int) -> str:
        return DESCENDANT_LABELS.get(depth, f'descendant ({depth} generations)')

    def get_lineage(self, dog_id: str) -> Optional[Dict[str, List[str]]]:
        return self.pedigree.get(dog_id)

    @staticmethod
    def get_generation(generation: int, dogs: Dict[str, 'CelebrityDog']) -> List['CelebrityDog']:
        return [dog for dog in dogs.values() if dog.generation == generation]

    def get_statistics(self) -> Dict[str, float]:
        total_dogs = len(self.pedigree)
        total_relationships = 0
        max_children = 0

        for entry in self.pedigree.values():
            total_relationships += len(entry['parents']) + len(entry['children'])
            max_children = max(max_children, len(entry['children']))

        return {
            'total_dogs': total_dogs,
            'total_relationships': total_relationships,
            'max_children': max_children,
            'average_children': total_relationships / total_dogs if total_dogs else 0.0
        }

    def clear(self) -> None:
        self.pedigree.clear()

    def serialize(self) -> List[list]:
        return [
            [dog_id, {'parents': list(entry['parents']), 'children': list(entry['children'])}]
            for dog_id, entry in self.pedigree.items()
        ]

    @classmethod
    def deserialize(cls, data: List[list]) -> 'LineageManager':
        manager = cls()
        for dog_id, entry in data:
            manager.pedigree[dog_id] = {
                'parents': list(entry.get('parents', [])),
                'children': list(entry.get('children', []))
            }
        return manager
