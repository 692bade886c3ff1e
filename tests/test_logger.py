import logging
import unittest

from autoplacer.utils.logger import SEARCH_LOGGERS, configure_logging, get_logger


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        root = logging.getLogger()
        self._handlers = list(root.handlers)
        self._level = root.level

    def tearDown(self) -> None:
        root = logging.getLogger()
        root.handlers[:] = self._handlers
        root.setLevel(self._level)
        for name in SEARCH_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)

    def test_debug_keeps_search_loggers_at_info(self) -> None:
        configure_logging(logging.DEBUG)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)
        for name in SEARCH_LOGGERS:
            self.assertEqual(logging.getLogger(name).level, logging.INFO)
        self.assertFalse(get_logger("autoplacer.engine.random_placer").isEnabledFor(logging.DEBUG))
        self.assertTrue(get_logger("autoplacer.engine.runner").isEnabledFor(logging.DEBUG))

    def test_search_detail_restores_debug(self) -> None:
        configure_logging(logging.DEBUG)
        configure_logging(logging.DEBUG, search_detail=True)
        for name in SEARCH_LOGGERS:
            self.assertEqual(logging.getLogger(name).level, logging.NOTSET)
            self.assertTrue(logging.getLogger(name).isEnabledFor(logging.DEBUG))

    def test_single_handler_after_reconfiguring(self) -> None:
        configure_logging(logging.WARNING)
        configure_logging(logging.INFO)
        root = logging.getLogger()
        self.assertEqual(len(root.handlers), 1)
        self.assertEqual(root.level, logging.INFO)
        self.assertEqual(logging.getLogger(SEARCH_LOGGERS[0]).level, logging.NOTSET)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
