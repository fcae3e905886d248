import unittest

import numpy as np

from drops.field import DropField, cull, empty_field, integrate, merge


def _field(ys, vys) -> DropField:
    count = len(ys)
    return DropField(
        x=np.arange(count, dtype=np.float64),
        y=np.asarray(ys, dtype=np.float64),
        vx=np.zeros(count),
        vy=np.asarray(vys, dtype=np.float64),
        rotation=np.zeros(count),
        angular_velocity=np.zeros(count),
        symbol_index=np.arange(count, dtype=np.int64),
        spawn_time=np.zeros(count),
    )


class DropFieldTests(unittest.TestCase):
    def test_integrate_returns_new_field_without_mutating_input(self) -> None:
        original = _field([0.0, 10.0], [100.0, 50.0])
        stepped = integrate(original, 0.1, gravity=20.0)

        np.testing.assert_allclose([10.0, 15.0], stepped.y)
        np.testing.assert_allclose([102.0, 52.0], stepped.vy)
        np.testing.assert_allclose([0.0, 10.0], original.y)
        np.testing.assert_allclose([100.0, 50.0], original.vy)

    def test_cull_removes_rows_past_limit_only(self) -> None:
        field = _field([10.0, 700.0, 650.0], [1.0, 2.0, 3.0])
        kept = cull(field, 650.0)

        self.assertEqual(2, len(kept))
        np.testing.assert_allclose([10.0, 650.0], kept.y)
        np.testing.assert_array_equal([0, 2], kept.symbol_index)

    def test_cull_keeps_same_field_when_nothing_falls_out(self) -> None:
        field = _field([1.0, 2.0], [0.0, 0.0])
        self.assertIs(field, cull(field, 100.0))

    def test_merge_concatenates_rows_in_order(self) -> None:
        merged = merge(_field([1.0], [5.0]), _field([2.0, 3.0], [6.0, 7.0]))
        self.assertEqual(3, len(merged))
        np.testing.assert_allclose([1.0, 2.0, 3.0], merged.y)

    def test_merge_with_empty_field_is_identity(self) -> None:
        field = _field([4.0], [1.0])
        self.assertIs(field, merge(field, empty_field()))
        self.assertIs(field, merge(empty_field(), field))


if __name__ == "__main__":
    unittest.main()
