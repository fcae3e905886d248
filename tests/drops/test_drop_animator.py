import unittest

import numpy as np

from drops import DropAnimator, DropConfig, DropConfigurationError


class _FixedRandom:
    """Deterministic random source that always picks the same point of each range."""
    def __init__(self, fraction: float = 0.5):
        self._fraction = fraction

    def uniform(self, low, high, size):
        return np.full(size, low + (high - low) * self._fraction, dtype=np.float64)

    def integers(self, low, high, size):
        return np.full(size, low, dtype=np.int64)


def _animator(config=None, *, fraction=0.5, viewport=(800.0, 600.0)):
    return DropAnimator(
        config or DropConfig(),
        viewport_size=viewport,
        random_source=_FixedRandom(fraction),
    )


class DropAnimatorTests(unittest.TestCase):
    def test_activate_spawns_batch_along_top_edge(self) -> None:
        animator = _animator()
        animator.activate((800.0, 600.0), 20)

        field = animator.field
        self.assertTrue(animator.is_active)
        self.assertEqual(20, len(animator))
        self.assertTrue(np.all(field.y == 0.0))
        self.assertTrue(np.all(field.x == 400.0))
        self.assertTrue(np.all(field.vy == 175.0))
        self.assertTrue(np.all(field.spawn_time == 0.0))

    def test_activate_uses_configured_count_by_default(self) -> None:
        animator = _animator(DropConfig(count=7))
        animator.activate()
        self.assertEqual(7, len(animator))
        self.assertEqual(7, animator.density)

    def test_activate_replaces_existing_drops(self) -> None:
        animator = _animator()
        animator.activate((800.0, 600.0), 5)
        animator.advance(0.5)
        animator.activate((800.0, 600.0), 3)

        self.assertEqual(3, len(animator))
        self.assertTrue(np.all(animator.field.y == 0.0))

    def test_advance_integrates_position_velocity_and_rotation(self) -> None:
        animator = _animator(DropConfig(gravity=60.0), fraction=0.75)
        animator.activate((800.0, 600.0), 1)
        field = animator.field
        self.assertEqual(270.0, field.rotation[0])
        self.assertEqual(45.0, field.angular_velocity[0])
        self.assertEqual(7.5, field.vx[0])
        self.assertEqual(212.5, field.vy[0])

        animator.advance(1.0)
        field = animator.field
        self.assertAlmostEqual(600.0 + 7.5, field.x[0])
        self.assertAlmostEqual(212.5, field.y[0])
        self.assertAlmostEqual(272.5, field.vy[0])
        self.assertAlmostEqual(315.0, field.rotation[0])

        animator.advance(1.0)
        self.assertAlmostEqual(0.0, animator.field.rotation[0])

    def test_terminal_velocity_caps_fall_speed(self) -> None:
        animator = _animator(DropConfig(gravity=60.0, terminal_velocity=180.0))
        animator.activate((800.0, 600.0), 1)
        animator.advance(1.0)

        self.assertAlmostEqual(175.0, animator.field.y[0])
        self.assertAlmostEqual(180.0, animator.field.vy[0])

    def test_negative_delta_is_clamped_to_zero(self) -> None:
        animator = _animator()
        animator.activate((800.0, 600.0), 4)
        animator.advance(-3.0)

        self.assertTrue(np.all(animator.field.y == 0.0))
        self.assertTrue(np.all(animator.field.vy == 175.0))

    def test_advance_is_noop_while_inactive(self) -> None:
        animator = _animator()
        animator.advance(1.0)
        self.assertFalse(animator.is_active)
        self.assertEqual(0, len(animator))

    def test_deactivate_clears_and_is_idempotent(self) -> None:
        animator = _animator()
        animator.activate((800.0, 600.0), 10)
        animator.deactivate()
        animator.deactivate()

        self.assertFalse(animator.is_active)
        self.assertEqual(0, len(animator))
        self.assertEqual((), animator.snapshot())

    def test_fallen_drops_are_replaced_at_the_top(self) -> None:
        animator = _animator(DropConfig(gravity=0.0, margin=50.0))
        animator.activate((800.0, 600.0), 3)

        animator.advance(3.0)
        self.assertAlmostEqual(525.0, animator.field.y[0])
        self.assertEqual(3, len(animator))

        animator.advance(1.0)
        field = animator.field
        self.assertEqual(3, len(animator))
        self.assertTrue(np.all(field.y == 0.0))
        self.assertTrue(np.all(field.spawn_time == 4.0))

    def test_population_returns_to_steady_density(self) -> None:
        animator = DropAnimator(
            DropConfig(),
            viewport_size=(800.0, 600.0),
            random_source=np.random.default_rng(7),
        )
        animator.activate((800.0, 600.0), 20)

        for _ in range(60 * 20):
            animator.advance(1.0 / 60.0)
            self.assertEqual(20, len(animator))

        self.assertTrue(np.all(animator.field.spawn_time > 0.0))
        self.assertTrue(np.all(animator.field.y <= 650.0))

    def test_low_water_ratio_controls_refill_threshold(self) -> None:
        config = DropConfig(low_water_ratio=0.5)
        self.assertEqual(10, config.low_water_mark(20))
        self.assertEqual(1, config.low_water_mark(1))
        self.assertEqual(0, config.low_water_mark(0))
        self.assertEqual(20, DropConfig().low_water_mark(20))

    def test_snapshot_exposes_symbols_and_positions(self) -> None:
        animator = _animator(DropConfig(symbols=("🍓", "🚀")))
        animator.activate((800.0, 600.0), 2)
        animator.advance(0.5)

        snapshot = animator.snapshot()
        self.assertEqual(2, len(snapshot))
        self.assertEqual("🍓", snapshot[0].symbol)
        self.assertAlmostEqual(87.5, snapshot[0].y)
        self.assertAlmostEqual(400.0, snapshot[0].x)

    def test_random_draws_stay_within_configured_ranges(self) -> None:
        config = DropConfig(min_fall_speed=100.0, max_fall_speed=250.0, max_drift=15.0)
        animator = DropAnimator(
            config,
            viewport_size=(640.0, 480.0),
            random_source=np.random.default_rng(3),
        )
        animator.activate(count=200)
        field = animator.field

        self.assertTrue(np.all((field.x >= 0.0) & (field.x < 640.0)))
        self.assertTrue(np.all((field.vy >= 100.0) & (field.vy <= 250.0)))
        self.assertTrue(np.all(np.abs(field.vx) <= 15.0))
        self.assertTrue(np.all((field.symbol_index >= 0) & (field.symbol_index < len(config.symbols))))

    def test_config_rejects_invalid_ranges(self) -> None:
        with self.assertRaises(DropConfigurationError):
            DropConfig(min_fall_speed=300.0, max_fall_speed=100.0)
        with self.assertRaises(DropConfigurationError):
            DropConfig(low_water_ratio=0.0)
        with self.assertRaises(DropConfigurationError):
            DropConfig(count=-1)
        with self.assertRaises(DropConfigurationError):
            DropConfig(symbols=())

    def test_config_rejects_non_finite_fall_speeds(self) -> None:
        with self.assertRaises(DropConfigurationError):
            DropConfig(max_fall_speed=float("inf"))
        with self.assertRaises(DropConfigurationError):
            DropConfig(min_fall_speed=float("nan"))
        with self.assertRaises(DropConfigurationError):
            DropConfig(terminal_velocity=float("nan"))

    def test_non_finite_viewport_keeps_previous_bounds(self) -> None:
        animator = _animator()
        animator.resize((float("inf"), 500.0))
        animator.activate((1024.0, float("nan")), 5)

        self.assertEqual((800.0, 600.0), animator.viewport_size)
        self.assertEqual(5, len(animator))
        self.assertTrue(np.all(animator.field.x == 400.0))

    def test_non_finite_initial_viewport_uses_default(self) -> None:
        animator = _animator(viewport=(float("inf"), float("inf")))
        self.assertEqual((1920.0, 1080.0), animator.viewport_size)


if __name__ == "__main__":
    unittest.main()
