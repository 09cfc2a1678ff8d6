"""
추첨 결과 분석 모듈

이 패키지는 빈도 집계, 조합 패턴 분석, 빈도표 시각화 기능을 제공합니다.
"""

from .frequency import (
    FrequencyAggregator,
    aggregate_chance_frequencies,
    aggregate_lotto_frequencies,
    summarize_lotto_draws,
)
from .pattern_analyzer import PatternAnalyzer, PatternAnalysisConfig, PatternStats

__all__ = [
    'FrequencyAggregator',
    'aggregate_lotto_frequencies',
    'aggregate_chance_frequencies',
    'summarize_lotto_draws',
    'PatternAnalyzer',
    'PatternAnalysisConfig',
    'PatternStats',
]
