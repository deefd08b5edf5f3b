import logging
import tempfile
import unittest
from pathlib import Path

from lbgeo_app.config import AppConfig
from lbgeo_app.logging_setup import PACKAGE_LOGGER, configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.logger = logging.getLogger(PACKAGE_LOGGER)
        self._saved_handlers = list(self.logger.handlers)
        self._saved_level = self.logger.level
        self.logger.handlers = []

    def tearDown(self):
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers = self._saved_handlers
        self.logger.setLevel(self._saved_level)
        self.tmp.cleanup()

    def test_file_and_console_handlers_added_once(self):
        config = AppConfig(log_dir=str(Path(self.tmp.name) / "logs"), log_level="DEBUG")
        configure_logging(config)
        configure_logging(config)

        file_handlers = [h for h in self.logger.handlers if isinstance(h, logging.FileHandler)]
        console_handlers = [h for h in self.logger.handlers if type(h) is logging.StreamHandler]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(len(console_handlers), 1)
        self.assertTrue((Path(self.tmp.name) / "logs" / "lbgeo.log").exists())
        self.assertEqual(self.logger.level, logging.DEBUG)

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(AppConfig(log_dir=self.tmp.name, log_level="VERBOSE"))
        self.assertEqual(self.logger.level, logging.INFO)


if __name__ == "__main__":
    unittest.main()
