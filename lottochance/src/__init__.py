"""
로또/찬스 분석 시스템 - 소스 코드

이 패키지는 분석 엔진의 핵심 기능을 구현합니다.
"""

from .analysis.pattern_analyzer import PatternAnalyzer, PatternAnalysisConfig
from .engine import LotteryEngine
from .utils.data_loader import DataManager

__all__ = ['PatternAnalyzer', 'PatternAnalysisConfig', 'LotteryEngine', 'DataManager']
