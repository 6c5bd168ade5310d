import unittest

from dense_bitmap import (
    Bitmap,
    BitwiseOp,
    InvalidArgumentError,
    bitmap_and,
    bitmap_or,
    bitmap_xor,
    count,
    samesize_and,
)


OPERATIONS = {
    "or": (bitmap_or, lambda a, b: a | b),
    "and": (bitmap_and, lambda a, b: a & b),
    "xor": (bitmap_xor, lambda a, b: a ^ b),
}


def make(size, members):
    b = Bitmap(size)
    for i in members:
        b.set(i)
    return b


class TestAlgebra(unittest.TestCase):
    def setUp(self):
        self.small = make(10, [0, 3, 4, 9, 10])
        self.large = make(29, [0, 1, 4, 8, 10, 11, 17, 29])

    def test_example_or(self):
        a = Bitmap(7)
        a.set_all()
        b = Bitmap(15)
        r = bitmap_or(a, b)
        self.assertEqual(r.size, 15)
        self.assertEqual(r.test(3), 1)
        self.assertEqual(r.test(10), 0)

    def test_result_sized_to_larger(self):
        for func, _ in OPERATIONS.values():
            self.assertEqual(func(self.small, self.large).size, 29)
            self.assertEqual(func(self.large, self.small).size, 29)

    def test_commutative(self):
        for name, (func, _) in OPERATIONS.items():
            with self.subTest(op=name):
                self.assertEqual(func(self.small, self.large), func(self.large, self.small))

    def test_overlap_matches_bitwise(self):
        for name, (func, expect) in OPERATIONS.items():
            r = func(self.small, self.large)
            for i in range(self.small.capacity):
                with self.subTest(op=name, bit=i):
                    self.assertEqual(r.test(i), expect(self.small.test(i), self.large.test(i)))

    def test_suffix_passes_through(self):
        for name, (func, _) in OPERATIONS.items():
            r = func(self.small, self.large)
            for i in range(self.small.capacity, self.large.capacity):
                with self.subTest(op=name, bit=i):
                    self.assertEqual(r.test(i), self.large.test(i))

    def test_same_byte_count_different_sizes(self):
        a = make(9, [1, 9])
        b = make(13, [1, 12, 13])
        self.assertEqual(list(bitmap_and(a, b)), [1, 12, 13])
        self.assertEqual(list(bitmap_or(a, b)), [1, 9, 12, 13])
        self.assertEqual(list(bitmap_xor(a, b)), [9, 12, 13])

    def test_dirty_tail_does_not_leak(self):
        a = Bitmap(9)
        a.set_all()  # tail bits 10..15 are set too
        b = Bitmap(20)
        r = bitmap_or(a, b)
        self.assertEqual(list(r), list(range(10)))
        self.assertEqual(bitmap_xor(a, b).count(), 10)

    def test_and_with_dirty_tail(self):
        a = Bitmap(9)
        a.clear_all()
        a.set(2)
        b = Bitmap(20)
        b.set_all()
        r = bitmap_and(a, b)
        self.assertEqual(list(r), [2] + list(range(10, 21)))

    def test_inputs_are_not_mutated(self):
        a = Bitmap(9)
        a.set_all()
        b = Bitmap(9)
        before_a, before_b = bytes(a._storage), bytes(b._storage)
        for func, _ in OPERATIONS.values():
            func(a, b)
        count(a)
        self.assertEqual(bytes(a._storage), before_a)
        self.assertEqual(bytes(b._storage), before_b)

    def test_same_operand_twice(self):
        a = make(12, [1, 5, 12])
        self.assertEqual(list(bitmap_or(a, a)), [1, 5, 12])
        self.assertEqual(list(bitmap_and(a, a)), [1, 5, 12])
        self.assertEqual(bitmap_xor(a, a).count(), 0)

    def test_operators(self):
        self.assertEqual(self.small | self.large, bitmap_or(self.small, self.large))
        self.assertEqual(self.small & self.large, bitmap_and(self.small, self.large))
        self.assertEqual(self.small ^ self.large, bitmap_xor(self.small, self.large))

    def test_rejects_non_bitmap(self):
        with self.assertRaises(InvalidArgumentError):
            bitmap_or(self.small, {1, 2})

    def test_pad_bytes(self):
        self.assertEqual(BitwiseOp.AND.pad_byte, 0xFF)
        self.assertEqual(BitwiseOp.OR.pad_byte, 0x00)
        self.assertEqual(BitwiseOp.XOR.pad_byte, 0x00)


class TestSamesizeAnd(unittest.TestCase):
    def test_in_place(self):
        a = make(17, [0, 3, 8, 16, 17])
        b = make(17, [3, 9, 16, 17])
        r = samesize_and(a, b)
        self.assertIs(r, a)
        self.assertEqual(list(a), [3, 16, 17])
        self.assertEqual(list(b), [3, 9, 16, 17])

    def test_size_mismatch(self):
        with self.assertRaises(InvalidArgumentError):
            samesize_and(Bitmap(8), Bitmap(9))

    def test_tail_of_other_is_ignored(self):
        a = make(9, [9])
        a.set_range(0, 10)
        b = Bitmap(9)
        b.set_all()
        b.clear(0)
        samesize_and(a, b)
        self.assertEqual(list(a), list(range(1, 10)))

    def test_self_and(self):
        a = make(12, [2, 11])
        samesize_and(a, a)
        self.assertEqual(list(a), [2, 11])

    def test_iand_operator(self):
        a = make(12, [2, 3, 11])
        b = make(12, [3, 11])
        a &= b
        self.assertEqual(list(a), [3, 11])


class TestCount(unittest.TestCase):
    def test_count(self):
        self.assertEqual(count(Bitmap(30)), 0)
        full = Bitmap(30)
        full.set_all()
        self.assertEqual(count(full), 31)
        self.assertEqual(len(full), 31)

    def test_count_ignores_tail(self):
        b = Bitmap(10)
        b.set_all()
        b.clear(10)
        self.assertEqual(count(b), 10)


if __name__ == "__main__":
    unittest.main()
