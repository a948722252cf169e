import unittest

from celedog.evolution.lineage_manager import LineageManager
from celedog.tests.factories import make_config, make_dog


class TestLineageManager(unittest.TestCase):
    def setUp(self):
        """
        Build a small pedigree where f's ancestry reaches a twice:

            a   b
             \\ /
              c   d
               \\ /
                e   a
                 \\ /
                  f
        """
        config = make_config()
        self.lineage = LineageManager()
        self.a = make_dog('A', config=config)
        self.b = make_dog('B', config=config)
        self.d = make_dog('D', config=config)
        self.c = make_dog('C', generation=1, parent_ids=[self.a.id, self.b.id], config=config)
        self.e = make_dog('E', generation=2, parent_ids=[self.c.id, self.d.id], config=config)
        self.f = make_dog('F', generation=3, parent_ids=[self.e.id, self.a.id], config=config)
        self.unrelated = make_dog('U', config=config)

        for dog in (self.a, self.b, self.d, self.c, self.e, self.f, self.unrelated):
            self.lineage.add_dog(dog)

    def test_ancestry_visits_each_dog_once(self):
        ancestry = self.lineage.get_ancestry(self.f.id)

        ids = [entry['id'] for entry in ancestry]
        self.assertEqual(ids, [self.f.id, self.e.id, self.a.id, self.c.id, self.d.id, self.b.id])
        self.assertEqual(len(ids), len(set(ids)))

        by_id = {entry['id']: entry for entry in ancestry}
        # a is reached first as a parent, so it is not relabelled deeper
        self.assertEqual(by_id[self.a.id]['relationship'], 'parent')
        self.assertEqual(by_id[self.c.id]['relationship'], 'grandparent')
        self.assertEqual(by_id[self.b.id]['relationship'], 'great-grandparent')
        self.assertEqual(by_id[self.f.id]['relationship'], 'self')
        self.assertEqual(by_id[self.e.id]['parents'], [self.c.id, self.d.id])

    def test_ancestry_depth_limit_is_inclusive(self):
        ids = [entry['id'] for entry in self.lineage.get_ancestry(self.f.id, max_depth=1)]
        self.assertEqual(ids, [self.f.id, self.e.id, self.a.id])

        ids = [entry['id'] for entry in self.lineage.get_ancestry(self.f.id, max_depth=0)]
        self.assertEqual(ids, [self.f.id])

    def test_unknown_dog_has_no_ancestry(self):
        self.assertEqual(self.lineage.get_ancestry('missing'), [])

    def test_descendants(self):
        descendants = self.lineage.get_descendants(self.a.id)
        self.assertEqual([entry['id'] for entry in descendants],
                         [self.a.id, self.c.id, self.f.id, self.e.id])
        labels = {entry['id']: entry['relationship'] for entry in descendants}
        self.assertEqual(labels[self.c.id], 'child')
        self.assertEqual(labels[self.e.id], 'grandchild')

    def test_relationship_labels(self):
        self.assertEqual(LineageManager.get_relationship(4), 'great-great-grandparent')
        self.assertEqual(LineageManager.get_relationship(6), 'ancestor (6 generations)')
        self.assertEqual(LineageManager.get_descendant_relationship(3), 'great-grandchild')
        self.assertEqual(LineageManager.get_descendant_relationship(5), 'descendant (5 generations)')

    def test_are_related(self):
        self.assertTrue(self.lineage.are_related(self.f.id, self.b.id))
        self.assertFalse(self.lineage.are_related(self.c.id, self.d.id))
        self.assertTrue(self.lineage.are_related(self.e.id, self.f.id))
        self.assertFalse(self.lineage.are_related(self.f.id, self.unrelated.id))
        # b is three generations above f
        self.assertFalse(self.lineage.are_related(self.f.id, self.b.id, max_depth=2))

    def test_add_dog_is_idempotent(self):
        before = self.lineage.serialize()
        self.lineage.add_dog(self.f)
        self.lineage.add_dog(self.c)
        self.assertEqual(self.lineage.serialize(), before)
        self.assertEqual(self.lineage.get_lineage(self.a.id)['children'], [self.c.id, self.f.id])

    def test_unknown_parents_get_stub_entries(self):
        lineage = LineageManager()
        pup = make_dog('Pup', generation=1, parent_ids=['p1', 'p2'])
        lineage.add_dog(pup)
        self.assertEqual(lineage.get_lineage('p1'), {'parents': [], 'children': [pup.id]})

    def test_get_generation(self):
        dogs = {dog.id: dog for dog in (self.a, self.b, self.c, self.e)}
        self.assertEqual(LineageManager.get_generation(0, dogs), [self.a, self.b])
        self.assertEqual(LineageManager.get_generation(2, dogs), [self.e])

    def test_statistics(self):
        stats = self.lineage.get_statistics()
        self.assertEqual(stats['total_dogs'], 7)
        # three births, each counted from both sides
        self.assertEqual(stats['total_relationships'], 12)
        self.assertEqual(stats['max_children'], 2)
        self.assertAlmostEqual(stats['average_children'], 12 / 7)

        self.lineage.clear()
        self.assertEqual(self.lineage.get_statistics()['average_children'], 0.0)

    def test_serialize_round_trip(self):
        restored = LineageManager.deserialize(self.lineage.serialize())
        self.assertEqual(restored.pedigree, self.lineage.pedigree)


if __name__ == '__main__':
    unittest.main()
