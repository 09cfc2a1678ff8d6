"""
로또/찬스 추첨 결과 분석 시스템

이 패키지는 과거 추첨 결과 CSV를 파싱하고, 빈도 통계와 휴리스틱 예측을 제공합니다.
"""

from pathlib import Path
from .src.utils.config import Config
from .src.utils.data_loader import DataManager, parse_chance_csv, parse_lotto_csv
from .src.utils.exceptions import LotteryDataError, NoValidDrawsError
from .src.analysis.frequency import aggregate_chance_frequencies, aggregate_lotto_frequencies
from .src.analysis.pattern_analyzer import PatternAnalyzer, PatternAnalysisConfig
from .src.prediction import generate_chance_prediction, generate_lotto_prediction
from .src.engine import LotteryEngine

# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).parent

# 버전
__version__ = "1.0.0"

__all__ = [
    'Config',
    'DataManager',
    'LotteryEngine',
    'PatternAnalyzer',
    'PatternAnalysisConfig',
    'LotteryDataError',
    'NoValidDrawsError',
    'parse_lotto_csv',
    'parse_chance_csv',
    'aggregate_lotto_frequencies',
    'aggregate_chance_frequencies',
    'generate_lotto_prediction',
    'generate_chance_prediction',
]
