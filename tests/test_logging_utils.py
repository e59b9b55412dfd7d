import logging
import tempfile
import unittest
from pathlib import Path

from ui.logging_utils import setup_logging


class TestSetupLogging(unittest.TestCase):
    def setUp(self) -> None:
        self.root = logging.getLogger()
        self._saved_handlers = self.root.handlers[:]
        self._saved_level = self.root.level
        self.root.handlers.clear()

    def tearDown(self) -> None:
        for handler in self.root.handlers:
            handler.close()
        self.root.handlers[:] = self._saved_handlers
        self.root.setLevel(self._saved_level)

    def test_writes_to_file_and_console(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "studylens.log"

            setup_logging(level="debug", log_file=str(log_file))

            kinds = {type(handler) for handler in self.root.handlers}
            self.assertEqual(kinds, {logging.StreamHandler, logging.FileHandler})
            self.assertEqual(self.root.level, logging.DEBUG)
            self.assertTrue(log_file.parent.exists())
            for handler in self.root.handlers:
                handler.close()

    def test_empty_file_name_disables_file_handler(self):
        setup_logging(level="WARNING", log_file="")

        self.assertEqual([type(handler) for handler in self.root.handlers], [logging.StreamHandler])
        self.assertEqual(self.root.level, logging.WARNING)

    def test_existing_handlers_are_left_alone(self):
        existing = logging.NullHandler()
        self.root.addHandler(existing)

        setup_logging(log_file="")

        self.assertEqual(self.root.handlers, [existing])


if __name__ == "__main__":
    unittest.main()
