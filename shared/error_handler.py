"""
오류 처리 및 로깅 유틸리티

콘솔 로그는 색상으로 구분해 표시하고, 파일 로그는 요청한 경우에만 기록합니다.
임포트 시점에는 어떤 핸들러도 설치하지 않습니다.
"""

import logging
import traceback
import functools
import time
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

# ANSI 컬러 코드
COLORS = {
    'DEBUG': '\033[94m',  # 파란색
    'INFO': '\033[92m',   # 녹색
    'WARNING': '\033[93m', # 노란색
    'ERROR': '\033[91m',  # 빨간색
    'CRITICAL': '\033[41m\033[97m', # 배경 빨간색, 글자 흰색
    'RESET': '\033[0m'    # 리셋
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s - [%(filename)s:%(lineno)d]'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

class ColoredFormatter(logging.Formatter):
    """컬러 로그 포매터"""

    def format(self, record):
        levelname = record.levelname
        message = super().format(record)

        if levelname in COLORS:
            return f"{COLORS[levelname]}{message}{COLORS['RESET']}"
        return message

def get_logger(name: str) -> logging.Logger:
    """모듈별 로거 생성"""
    return logging.getLogger(name)

def setup_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    level: int = logging.INFO
) -> logging.Logger:
    """로거 설정

    같은 이름으로 여러 번 호출해도 핸들러가 중복 추가되지 않습니다.

    Args:
        name: 로거 이름
        log_file: 파일 로그 경로 (None이면 콘솔만 사용)
        level: 콘솔 로그 레벨

    Returns:
        설정된 로거
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    if not any(getattr(h, '_lottochance_console', False) for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        console_handler._lottochance_console = True
        logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        already_attached = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve() == log_path.resolve()
            for h in logger.handlers
        )
        if not already_attached:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=DATE_FORMAT))
            logger.addHandler(file_handler)

    return logger

# 성능 측정 데코레이터
def log_performance(func: Callable) -> Callable:
    """
    실행 시간을 DEBUG 레벨로 기록하는 데코레이터

    예외가 발생하면 소요 시간과 함께 기록한 뒤 그대로 다시 발생시킵니다.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time = time.perf_counter() - start_time
            logger.error(
                f"함수 {func.__name__} 실행 실패: "
                f"시간={execution_time:.3f}초, "
                f"오류={str(e)}"
            )
            raise

        execution_time = time.perf_counter() - start_time
        logger.debug(f"함수 {func.__name__} 실행 완료: 시간={execution_time:.3f}초")
        return result

    return wrapper

# 안전한 실행 데코레이터
T = TypeVar('T')

def safe_execute(default_return: Optional[T] = None) -> Callable:
    """
    안전한 실행 데코레이터

    부가 출력(그래프 저장 등)처럼 실패해도 분석 결과에 영향이 없어야 하는
    작업에만 사용합니다. 예외를 스택 트레이스와 함께 기록하고 기본값을 반환합니다.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Optional[T]:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger = logging.getLogger(func.__module__)
                logger.error(
                    f"함수 {func.__name__} 실행 중 오류 발생:\n"
                    f"오류: {str(e)}\n"
                    f"스택 트레이스:\n{traceback.format_exc()}"
                )
                return default_return
        return wrapper
    return decorator
