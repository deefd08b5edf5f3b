import os
import unittest
from unittest import mock

from lbgeo_app.config import DEFAULT_API_URL, load_config


def _load(env):
    with mock.patch.dict(os.environ, env, clear=True), mock.patch("lbgeo_app.config.load_dotenv"):
        return load_config()


class LoadConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = _load({})
        self.assertEqual(config.api_base_url, DEFAULT_API_URL)
        self.assertEqual(config.api_timeout, 15.0)
        self.assertEqual(config.fetch_workers, 4)
        self.assertEqual(config.log_level, "INFO")
        self.assertEqual(config.web_port, 8550)
        self.assertEqual(config.ui_view, "web")

    def test_trailing_slash_is_stripped(self):
        config = _load({"LBGEO_API_URL": "https://example.org/api/"})
        self.assertEqual(config.api_base_url, "https://example.org/api")

    def test_url_without_scheme_is_rejected(self):
        with self.assertRaises(EnvironmentError) as ctx:
            _load({"LBGEO_API_URL": "example.org/api"})
        self.assertIn("LBGEO_API_URL", str(ctx.exception))

    def test_malformed_numbers_fall_back_to_defaults(self):
        config = _load(
            {
                "LBGEO_API_TIMEOUT": "rápido",
                "LBGEO_FETCH_WORKERS": "0",
                "LBGEO_WEB_PORT": "abc",
            }
        )
        self.assertEqual(config.api_timeout, 15.0)
        self.assertEqual(config.fetch_workers, 4)
        self.assertEqual(config.web_port, 8550)

    def test_overrides(self):
        config = _load(
            {
                "LBGEO_API_TIMEOUT": "3.5",
                "LBGEO_FETCH_WORKERS": "2",
                "LBGEO_LOG_LEVEL": "debug",
                "LBGEO_WEB_PORT": "9000",
                "LBGEO_UI_VIEW": "Desktop",
            }
        )
        self.assertEqual(config.api_timeout, 3.5)
        self.assertEqual(config.fetch_workers, 2)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.web_port, 9000)
        self.assertEqual(config.ui_view, "desktop")

    def test_unknown_view_falls_back_to_web(self):
        self.assertEqual(_load({"LBGEO_UI_VIEW": "tv"}).ui_view, "web")


if __name__ == "__main__":
    unittest.main()
