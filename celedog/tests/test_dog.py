import unittest
from unittest import mock

from celedog.entities.dog import CelebrityDog
from celedog.evolution.genome import Genome
from celedog.tests.factories import make_config, make_dog, plain_genes


class TestCelebrityDog(unittest.TestCase):
    def setUp(self):
        self.config = make_config()

    def test_new_dog_defaults(self):
        dog = CelebrityDog(plain_genes(), config=self.config)
        self.assertEqual(dog.generation, 0)
        self.assertEqual(dog.parent_ids, [])
        self.assertEqual(dog.rarity, 1)
        self.assertEqual(dog.value, 500)
        self.assertIsInstance(dog.genes, Genome)
        self.assertEqual(len(dog.id), 36)

    def test_ids_are_unique(self):
        ids = {CelebrityDog(plain_genes(), config=self.config).id for _ in range(50)}
        self.assertEqual(len(ids), 50)

    def test_invalid_genes_raise(self):
        genes = plain_genes()
        del genes['coatColor']
        with self.assertRaises(ValueError):
            CelebrityDog(genes, config=self.config)
        with self.assertRaises(ValueError):
            CelebrityDog('not genes', config=self.config)

    def test_parent_count_must_be_zero_or_two(self):
        with self.assertRaises(ValueError):
            CelebrityDog(plain_genes(), 1, ['only-one'], config=self.config)
        with self.assertRaises(ValueError):
            CelebrityDog(plain_genes(), 1, ['a', 'b', 'c'], config=self.config)

    def test_generation_must_be_non_negative_int(self):
        for generation in (-1, 1.5, True, '2'):
            with self.assertRaises(ValueError):
                CelebrityDog(plain_genes(), generation, config=self.config)

    def test_assign_rarity_updates_value(self):
        dog = make_dog(rarity=4, config=self.config)
        self.assertEqual(dog.value, 40000)
        self.assertEqual(dog.get_sell_value(), 20000)
        self.assertEqual(dog.get_rarity_name(), 'Epic')

        dog.assign_rarity(7)
        self.assertEqual(dog.value, 500)
        self.assertEqual(dog.get_rarity_name(), 'Unknown')

    def test_create_starter(self):
        starter = {'name': 'Pupcasso', 'rarity': 3, 'genes': plain_genes()}
        dog = CelebrityDog.create_starter(starter, config=self.config)
        self.assertEqual(dog.name, 'Pupcasso')
        self.assertEqual(dog.rarity, 3)
        self.assertEqual(dog.value, 10000)
        self.assertFalse(dog.has_parents())

    def test_special_trait_flag(self):
        self.assertFalse(make_dog(config=self.config).has_special_trait())
        self.assertTrue(make_dog(config=self.config, specialTrait='redCarpet').has_special_trait())

    def test_age(self):
        with mock.patch('celedog.entities.dog.now_ms', return_value=1_000_000):
            dog = CelebrityDog(plain_genes(), config=self.config)
        with mock.patch('celedog.entities.dog.now_ms', return_value=1_000_000 + 125_000):
            self.assertEqual(dog.get_age(), 125_000)
            self.assertEqual(dog.get_age_string(), '2m')

    def test_summary(self):
        dog = make_dog('Lick Jagger', rarity=2, config=self.config)
        summary = dog.get_summary()
        self.assertEqual(summary['name'], 'Lick Jagger')
        self.assertEqual(summary['rarity'], 'Uncommon')
        self.assertEqual(summary['sell_value'], 1000)
        self.assertEqual(summary['talent'], 'comedy')

    def test_serialize_round_trip_keeps_identity(self):
        dog = make_dog('Emma Bone', rarity=5, generation=2, parent_ids=['p1', 'p2'],
                       config=self.config, specialTrait='awardWinner')
        # A stored value survives even if prices change later
        dog.value = 123456
        record = dog.serialize()

        self.assertEqual(set(record), {'id', 'genes', 'generation', 'parentIds',
                                       'birthTime', 'name', 'rarity', 'value'})
        self.assertEqual(record['genes']['specialTrait'], 'awardWinner')

        restored = CelebrityDog.deserialize(record, config=self.config)
        self.assertEqual(restored.id, dog.id)
        self.assertEqual(restored.birth_time, dog.birth_time)
        self.assertEqual(restored.genes, dog.genes)
        self.assertEqual(restored.parent_ids, ['p1', 'p2'])
        self.assertEqual(restored.rarity, 5)
        self.assertEqual(restored.value, 123456)


if __name__ == '__main__':
    unittest.main()
