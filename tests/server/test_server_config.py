import tempfile
import unittest
from pathlib import Path

from app_config_schema import UIServerSettings
from server.config import ServerConfigurationError, UIServerConfig


class UIServerConfigTests(unittest.TestCase):
    def test_disabled_server_needs_no_index_file(self) -> None:
        config = UIServerConfig.from_settings(UIServerSettings())

        self.assertFalse(config.enabled)
        self.assertEqual("", config.index_file)
        self.assertEqual("/ws", config.websocket_path)

    def test_enabled_server_requires_index_file(self) -> None:
        settings = UIServerSettings(enabled=True, index_file="  ")
        with self.assertRaisesRegex(ServerConfigurationError, "INDEX_FILE"):
            UIServerConfig.from_settings(settings)

    def test_enabled_server_rejects_missing_index_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "overlay.html"
            settings = UIServerSettings(enabled=True, index_file=str(missing))
            with self.assertRaisesRegex(ServerConfigurationError, "not found"):
                UIServerConfig.from_settings(settings)

    def test_static_root_is_index_directory(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            index = Path(temp_dir) / "overlay" / "index.html"
            index.parent.mkdir(parents=True)
            index.write_text("<html></html>", encoding="utf-8")

            config = UIServerConfig.from_settings(
                UIServerSettings(enabled=True, index_file=str(index))
            )

            self.assertEqual(str(index), config.index_file)
            self.assertEqual(index.parent, config.static_root)

    def test_port_must_be_in_range(self) -> None:
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(port=0)
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(port=70000)

    def test_host_cannot_be_blank(self) -> None:
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(host=" ")


if __name__ == "__main__":
    unittest.main()
