import unittest

from runtime.contracts import WindowManagerError
from runtime.window import LoggingWindowManager


class LoggingWindowManagerTests(unittest.TestCase):
    def test_tracks_fullscreen_and_minimized_state(self) -> None:
        manager = LoggingWindowManager()

        manager.execute("enter_overlay")
        self.assertTrue(manager.fullscreen)
        self.assertFalse(manager.minimized)

        manager.execute("exit_overlay")
        manager.execute("minimize")
        self.assertFalse(manager.fullscreen)
        self.assertTrue(manager.minimized)

    def test_history_keeps_only_most_recent_commands(self) -> None:
        manager = LoggingWindowManager(history_limit=3)
        for _ in range(50):
            manager.execute("enter_overlay")
            manager.execute("exit_overlay")

        self.assertEqual(
            ["exit_overlay", "enter_overlay", "exit_overlay"],
            list(manager.history),
        )

    def test_unknown_command_raises(self) -> None:
        manager = LoggingWindowManager()
        with self.assertRaises(WindowManagerError):
            manager.execute("focus")
        self.assertEqual([], list(manager.history))


if __name__ == "__main__":
    unittest.main()
