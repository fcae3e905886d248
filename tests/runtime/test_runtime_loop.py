import logging
import unittest
from queue import Queue

import numpy as np

from app_config_schema import RuntimeSettings
from drops import DropAnimator, DropConfig
from runtime import LoggingWindowManager, RuntimeBootstrap, RuntimeEngine
from server.events import parse_client_message
from session import SessionConfig, SessionController, Working


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []
        self.stopped = False

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))

    def stop(self, timeout_seconds: float = 5.0) -> None:
        self.stopped = True


def _clock(values):
    iterator = iter(values)
    return lambda: next(iterator)


class RuntimeEngineTests(unittest.TestCase):
    def _engine(self, clock, *, auto_start=False, work=10):
        self.ui_server = _UIServerStub()
        self.window_manager = LoggingWindowManager()
        self.command_queue: Queue = Queue()
        self.animator = DropAnimator(
            DropConfig(count=2),
            viewport_size=(640.0, 480.0),
            random_source=np.random.default_rng(1),
        )
        self.controller = SessionController(
            SessionConfig(work_duration_seconds=work, rest_duration_seconds=5),
            animator=self.animator,
        )
        settings = RuntimeSettings(
            rest_frame_seconds=0.001,
            work_frame_seconds=0.001,
            paused_frame_seconds=0.001,
            auto_start=auto_start,
        )
        return RuntimeEngine(
            RuntimeBootstrap(
                logger=logging.getLogger("test.runtime"),
                settings=settings,
                controller=self.controller,
                animator=self.animator,
                window_manager=self.window_manager,
                command_queue=self.command_queue,
                ui_server=self.ui_server,
            ),
            clock=clock,
        )

    def test_auto_start_runs_into_rest_and_shuts_down_cleanly(self) -> None:
        engine = self._engine(_clock([0.0, 0.0, 4.0, 10.0]), auto_start=True)

        exit_code = engine.run(max_frames=3)

        self.assertEqual(0, exit_code)
        self.assertEqual(["enter_overlay"], list(self.window_manager.history))
        self.assertEqual("resting", self.controller.snapshot().phase)
        self.assertFalse(self.animator.is_active)
        self.assertTrue(self.ui_server.stopped)

        first_type, first_payload = self.ui_server.events[0]
        self.assertEqual("session", first_type)
        self.assertEqual("sync", first_payload["action"])
        self.assertEqual("startup", first_payload["reason"])
        self.assertIn("drops", [event for event, _ in self.ui_server.events])

    def test_queued_command_is_applied_on_next_frame(self) -> None:
        engine = self._engine(_clock([0.0, 1.0]), work=60)
        self.command_queue.put({"command": "start"})

        engine.run(max_frames=2)

        self.assertEqual(Working(1.0), self.controller.state)
        self.assertTrue(self.command_queue.empty())
        actions = [payload["action"] for _, payload in self.ui_server.events]
        self.assertEqual(["sync", "start", "tick", "tick"], actions)

    def test_non_finite_viewport_from_client_does_not_stop_the_loop(self) -> None:
        engine = self._engine(_clock([0.0, 0.0, 1.0, 1.5]), auto_start=True, work=1)
        self.command_queue.put(
            parse_client_message('{"command": "viewport", "width": Infinity, "height": 500}')
        )

        exit_code = engine.run(max_frames=3)

        self.assertEqual(0, exit_code)
        self.assertEqual("resting", self.controller.snapshot().phase)
        self.assertEqual((640.0, 480.0), self.animator.viewport_size)
        self.assertIn("drops", [event for event, _ in self.ui_server.events])

    def test_stop_requested_before_run_skips_frames(self) -> None:
        engine = self._engine(_clock([]))
        engine.request_stop()

        self.assertEqual(0, engine.run())
        self.assertEqual(["session"], [event for event, _ in self.ui_server.events])
        self.assertTrue(self.ui_server.stopped)

    def test_unexpected_error_returns_failure_code(self) -> None:
        def broken_clock() -> float:
            raise RuntimeError("clock unavailable")

        engine = self._engine(broken_clock)
        with self.assertLogs("test.runtime", level="ERROR"):
            exit_code = engine.run(max_frames=1)

        self.assertEqual(1, exit_code)
        self.assertTrue(self.ui_server.stopped)


if __name__ == "__main__":
    unittest.main()
