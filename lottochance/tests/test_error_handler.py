"""
로깅/오류 처리 유틸리티 테스트 모듈
"""

import logging
import tempfile
import unittest
from pathlib import Path
import sys

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from shared.error_handler import log_performance, safe_execute, setup_logger


class TestErrorHandler(unittest.TestCase):
    """로깅 유틸리티 테스트"""

    def test_setup_logger_is_idempotent(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / 'logs' / 'lottochance.log'
            logger = setup_logger('lottochance.test', log_file=log_file)
            setup_logger('lottochance.test', log_file=log_file)

            self.assertEqual(len(logger.handlers), 2)
            logger.info("테스트 메시지")
            for handler in logger.handlers:
                handler.flush()
            self.assertTrue(log_file.exists())

            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def test_log_performance_reraises(self):
        @log_performance
        def fail():
            raise ValueError("실패")

        with self.assertLogs(__name__, level=logging.ERROR):
            with self.assertRaises(ValueError):
                fail()

    def test_log_performance_returns_result(self):
        @log_performance
        def add(a, b):
            return a + b

        self.assertEqual(add(1, 2), 3)
        self.assertEqual(add.__name__, 'add')

    def test_safe_execute_returns_default(self):
        @safe_execute(default_return='fallback')
        def fail():
            raise RuntimeError("실패")

        with self.assertLogs(__name__, level=logging.ERROR):
            self.assertEqual(fail(), 'fallback')


if __name__ == '__main__':
    unittest.main()
