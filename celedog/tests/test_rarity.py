import random
import unittest
from dataclasses import replace

from celedog.evolution.genome import Genome
from celedog.evolution.rarity_system import (
    COMMON,
    LEGENDARY,
    RARITY_NAMES,
    RaritySystem,
)
from celedog.tests.rng_helpers import ExplodingRandom, ScriptedRandom

PLAIN_GENES = Genome(
    body_type='slim', coat_color='#FFFFFF', marking_pattern='solid',
    marking_color='#000000', ear_type='small', tail_type='short',
    celebrity_head_id='head', celebrity_influence=0.5,
    temperament='lazy', talent='comedy'
)


class TestRaritySystem(unittest.TestCase):
    def test_branches_for_common_parents(self):
        """Two commons: floor stays common, upward branches add one or two tiers."""
        self.assertEqual(RaritySystem(ScriptedRandom([0.0])).calculate_rarity(1, 1, PLAIN_GENES), 1)
        self.assertEqual(RaritySystem(ScriptedRandom([0.6])).calculate_rarity(1, 1, PLAIN_GENES), 2)
        self.assertEqual(RaritySystem(ScriptedRandom([0.95])).calculate_rarity(1, 1, PLAIN_GENES), 3)

    def test_fractional_base_rounds_up_on_upward_branches(self):
        self.assertEqual(RaritySystem(ScriptedRandom([0.0])).calculate_rarity(1, 2, PLAIN_GENES), 1)
        self.assertEqual(RaritySystem(ScriptedRandom([0.6])).calculate_rarity(1, 2, PLAIN_GENES), 3)
        self.assertEqual(RaritySystem(ScriptedRandom([0.95])).calculate_rarity(1, 2, PLAIN_GENES), 4)

    def test_gene_bonuses(self):
        """A special trait adds a full tier, high influence half a tier."""
        genes = replace(PLAIN_GENES, special_trait='awardWinner', celebrity_influence=0.9)
        # base 1 + 1.0 + 0.5 = 2.5, floored to 2
        self.assertEqual(RaritySystem(ScriptedRandom([0.0])).calculate_rarity(1, 1, genes), 2)

        genes = replace(PLAIN_GENES, celebrity_influence=0.8)
        # 0.8 is not above the threshold
        self.assertEqual(RaritySystem(ScriptedRandom([0.0])).calculate_rarity(2, 2, genes), 2)

    def test_tiers_are_clamped(self):
        genes = replace(PLAIN_GENES, special_trait='redCarpet', celebrity_influence=1.0)
        self.assertEqual(RaritySystem(ScriptedRandom([0.99])).calculate_rarity(5, 5, genes), LEGENDARY)
        self.assertEqual(RaritySystem(ScriptedRandom([0.0])).calculate_rarity(5, 5, genes), LEGENDARY)
        self.assertEqual(RaritySystem(ScriptedRandom([0.0])).calculate_rarity(0, 0, PLAIN_GENES), COMMON)

    def test_result_always_in_range(self):
        system = RaritySystem(random.Random(99))
        for a in range(1, 6):
            for b in range(1, 6):
                for _ in range(20):
                    self.assertIn(system.calculate_rarity(a, b, PLAIN_GENES), RARITY_NAMES)

    def test_expected_distribution_consumes_no_randomness(self):
        system = RaritySystem(ExplodingRandom())
        distribution = system.get_expected_distribution(1, 2)

        self.assertEqual(distribution['floor'], {'probability': 0.55, 'tier': 1})
        self.assertEqual(distribution['plus_one'], {'probability': 0.35, 'tier': 3})
        self.assertEqual(distribution['plus_two'], {'probability': 0.10, 'tier': 4})
        self.assertAlmostEqual(sum(b['probability'] for b in distribution.values()), 1.0)

    def test_expected_distribution_clamps_tiers(self):
        distribution = RaritySystem().get_expected_distribution(5, 5, has_special_trait=True)
        self.assertEqual({b['tier'] for b in distribution.values()}, {LEGENDARY})

    def test_sample_distribution(self):
        system = RaritySystem(random.Random(2024))
        frequencies = system.sample_distribution(1, 1, PLAIN_GENES, trials=2000)

        self.assertEqual(set(frequencies), set(RARITY_NAMES))
        self.assertAlmostEqual(sum(frequencies.values()), 1.0)
        self.assertAlmostEqual(frequencies[1], 0.55, delta=0.05)
        self.assertAlmostEqual(frequencies[2], 0.35, delta=0.05)
        self.assertAlmostEqual(frequencies[3], 0.10, delta=0.04)
        self.assertEqual(frequencies[4], 0.0)

    def test_sample_distribution_rejects_zero_trials(self):
        with self.assertRaises(ValueError):
            RaritySystem().sample_distribution(1, 1, PLAIN_GENES, trials=0)

    def test_lookup_tables(self):
        self.assertEqual(RaritySystem.get_rarity_name(5), 'Legendary')
        self.assertEqual(RaritySystem.get_rarity_name(9), 'Unknown')
        self.assertEqual(RaritySystem.get_rarity_color(3), 0x0066FF)
        self.assertEqual(RaritySystem.get_rarity_color(9), 0xCCCCCC)

        table = RaritySystem.get_all_rarities()
        self.assertEqual([row['tier'] for row in table], [1, 2, 3, 4, 5])
        self.assertAlmostEqual(sum(row['probability'] for row in table), 1.0)


if __name__ == '__main__':
    unittest.main()
