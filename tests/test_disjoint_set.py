import unittest

from cells3d.dsu.disjoint_set import DisjointSet
from cells3d.dsu.link_policy import FixedLinkPolicy, RandomLinkPolicy
from cells3d.dsu.results import Found, NotFound, NOT_FOUND


class TestDisjointSet(unittest.TestCase):
    def setUp(self):
        self.ds = DisjointSet(policy=RandomLinkPolicy(seed=3))
        for a in range(10):
            self.ds.make_set(a)

    def test_make_set_is_idempotent(self):
        self.ds.union_sets(1, 2)
        root = self.ds.find_set(2)
        self.ds.make_set(2)
        self.ds.make_set(1)
        self.assertEqual(self.ds.find_set(2), root)
        self.assertEqual(self.ds.find_set(1), root)
        self.assertEqual(len(self.ds), 10)

    def test_find_set_is_idempotent(self):
        self.ds.union_sets(0, 1)
        self.ds.union_sets(1, 2)
        self.ds.union_sets(5, 2)
        for a in range(10):
            root = self.ds.find_set(a)
            self.assertEqual(self.ds.find_set(root), root)

    def test_repeated_union_is_noop(self):
        self.assertTrue(self.ds.union_sets(3, 4))
        before = (self.ds.find_set(3), self.ds.n_sets)
        for _ in range(5):
            self.assertFalse(self.ds.union_sets(3, 4))
            self.assertFalse(self.ds.union_sets(4, 3))
        self.assertEqual((self.ds.find_set(3), self.ds.n_sets), before)

    def test_set_count(self):
        self.assertEqual(self.ds.n_sets, 10)
        self.ds.union_sets(0, 1)
        self.ds.union_sets(2, 3)
        self.ds.union_sets(0, 3)
        self.assertEqual(self.ds.n_sets, 7)
        self.assertEqual(len(self.ds.leaders()), 7)

    def test_checked_variants(self):
        self.assertEqual(self.ds.find_set_checked(42), NOT_FOUND)
        self.assertIsInstance(self.ds.find_set_checked(42), NotFound)
        self.assertFalse(self.ds.find_set_checked(42))

        found = self.ds.find_set_checked(4)
        self.assertIsInstance(found, Found)
        self.assertEqual(found.value, 4)

        self.assertFalse(self.ds.union_sets_checked(4, 42))
        self.assertFalse(self.ds.union_sets_checked(42, 4))
        self.assertNotIn(42, self.ds)
        self.assertEqual(self.ds.n_sets, 10)
        self.assertTrue(self.ds.union_sets_checked(4, 5))

    def test_unchecked_find_on_untracked_raises(self):
        with self.assertRaises(KeyError):
            self.ds.find_set(99)

    def test_is_tracked_is_membership(self):
        self.assertTrue(self.ds.is_tracked(0))
        self.assertFalse(self.ds.is_tracked(10))
        self.ds.union_sets(0, 1)
        self.assertIs(self.ds.is_tracked(1), True)

    def test_partition_numbers_sets_in_element_order(self):
        self.ds.union_sets(9, 0)
        self.ds.union_sets(3, 7)
        self.ds.union_sets(7, 1)
        parts = self.ds.partition()
        self.assertEqual(parts[1], [0, 9])
        self.assertEqual(parts[2], [1, 3, 7])
        self.assertEqual(parts[3], [2])
        self.assertEqual(sorted(parts), list(range(1, 8)))
        self.assertEqual(sorted(x for members in parts.values() for x in members), list(range(10)))

    def test_elements_and_empty(self):
        self.assertEqual(self.ds.elements(), list(range(10)))
        empty = DisjointSet()
        self.assertEqual(empty.partition(), {})
        self.assertEqual(empty.leaders(), set())
        self.assertEqual(len(empty), 0)


class TestLinkPolicy(unittest.TestCase):
    def test_false_keeps_first_root(self):
        ds = DisjointSet(policy=FixedLinkPolicy(False))
        ds.make_set("a")
        ds.make_set("b")
        ds.union_sets("a", "b")
        self.assertEqual(ds.find_set("b"), "a")

    def test_true_keeps_second_root(self):
        ds = DisjointSet(policy=FixedLinkPolicy(True))
        ds.make_set("a")
        ds.make_set("b")
        ds.union_sets("a", "b")
        self.assertEqual(ds.find_set("a"), "b")

    def test_deep_chain_and_path_compression(self):
        n = 200_000
        ds = DisjointSet(policy=FixedLinkPolicy(True))
        for a in range(n + 1):
            ds.make_set(a)
        # each union hangs the current root under the next element
        for a in range(n):
            ds.union_sets(a, a + 1)
        self.assertEqual(ds.find_set(0), n)
        for a in (0, 1, n // 2, n - 1):
            self.assertEqual(ds._parent[a], n)

    def test_random_policy_still_partitions_correctly(self):
        for seed in range(5):
            ds = DisjointSet(policy=RandomLinkPolicy(seed=seed))
            for a in range(12):
                ds.make_set(a)
            for a in range(0, 12, 3):
                ds.union_sets(a, a + 1)
                ds.union_sets(a + 1, a + 2)
            parts = ds.partition()
            self.assertEqual(list(parts.values()),
                             [[0, 1, 2], [3, 4, 5], [6, 7, 8], [9, 10, 11]])


if __name__ == "__main__":
    unittest.main()
