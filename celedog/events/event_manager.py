from typing import List, Dict, TYPE_CHECKING
from datetime import datetime

import pandas as pd

if TYPE_CHECKING:
    from celedog.entities.dog import CelebrityDog


class EventManager:
    def __init__(self):
        self.events: List[Dict] = []
        self.sequence = 0

    def add_event(self, event_type: str, details: Dict) -> None:
        """Record a new event."""
        self.sequence += 1
        event = {
            'sequence': self.sequence,
            'timestamp': datetime.now().isoformat(),
            'type': event_type,
            'details': details
        }
        self.events.append(event)

    def record_birth(self, offspring: 'CelebrityDog', parent_a: 'CelebrityDog',
                     parent_b: 'CelebrityDog', cost: int) -> None:
        self.add_event('birth', {
            'dog_id': offspring.id,
            'name': offspring.name,
            'rarity': offspring.rarity,
            'generation': offspring.generation,
            'parents': [parent_a.name, parent_b.name],
            'cost': cost
        })

    def record_purchase(self, dog: 'CelebrityDog', price: int) -> None:
        self.add_event('purchase', {
            'dog_id': dog.id,
            'name': dog.name,
            'rarity': dog.rarity,
            'price': price
        })

    def record_sale(self, dog: 'CelebrityDog', value: int) -> None:
        self.add_event('sale', {
            'dog_id': dog.id,
            'name': dog.name,
            'rarity': dog.rarity,
            'value': value
        })

    def generate_story(self) -> str:
        """Generate narrative from recorded events."""
        if not self.events:
            return "The kennel is quiet. No dogs have come or gone yet."

        story_parts = ["A new chapter unfolds in the kennel..."]

        sorted_events = sorted(self.events, key=lambda e: e['sequence'])

        arrivals = []
        births = []
        departures = []

        for event in sorted_events:
            details = event['details']
            if event['type'] == 'purchase':
                arrivals.append(
                    f"#{event['sequence']}: {details['name']} joined the kennel "
                    f"for {details['price']} gold"
                )
            elif event['type'] == 'birth':
                births.append(
                    f"#{event['sequence']}: {details['name']} (generation {details['generation']}) "
                    f"was born to {' and '.join(details['parents'])}"
                )
            elif event['type'] == 'sale':
                departures.append(
                    f"#{event['sequence']}: {details['name']} was sold for {details['value']} gold"
                )

        if arrivals:
            story_parts.append("\nNew Arrivals:")
            story_parts.extend(arrivals)

        if births:
            story_parts.append("\nBirths:")
            story_parts.extend(births)

        if departures:
            story_parts.append("\nFarewells:")
            story_parts.extend(departures)

        story_parts.append(f"\nTotal Events: {len(self.events)}")

        return "\n".join(story_parts)

    def to_dataframe(self) -> pd.DataFrame:
        """Flatten the history into one row per event."""
        rows = [
            {'sequence': e['sequence'], 'timestamp': e['timestamp'], 'type': e['type'], **e['details']}
            for e in self.events
        ]
        return pd.DataFrame(rows)
