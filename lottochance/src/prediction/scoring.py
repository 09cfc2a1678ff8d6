"""
예측 신뢰도 계산

신뢰도는 빈도, 조합 패턴, 계절성 신호를 가중 평균한 0-100 사이의 휴리스틱 점수입니다.
"""

from typing import Dict, Iterable

import numpy as np

from ..analysis.pattern_analyzer import PatternStats

LOTTO_CONFIDENCE_WEIGHTS: Dict[str, float] = {
    'number': 0.4,
    'strong': 0.2,
    'pattern': 0.3,
    'seasonal': 0.1,
}

CHANCE_CONFIDENCE_WEIGHTS: Dict[str, float] = {
    'card': 0.4,
    'pattern': 0.3,
    'seasonal': 0.3,
}

SEASONAL_POINTS_PER_ENTRY = 10


def pattern_confidence(stats: PatternStats, selection: Iterable[int]) -> float:
    """
    조합 패턴 신뢰도

    쌍/삼중/사중 각 단계에서 선택값에 모두 포함된 조합의 (가중치 / 회차 수 × 100)을
    합해 단계의 항목 수로 나누고, 세 단계의 평균을 구합니다.
    """
    selected = set(selection)
    tier_scores = []
    for tier in stats.tiers:
        total = sum(
            stats.percentage(weight)
            for combo, weight in tier
            if all(value in selected for value in combo)
        )
        tier_scores.append(total / (len(tier) or 1))
    return sum(tier_scores) / len(tier_scores)


def seasonal_confidence(stats: PatternStats) -> float:
    return float((len(stats.monthly_top) + len(stats.weekly_top)) * SEASONAL_POINTS_PER_ENTRY)


def clamp_confidence(value: float) -> float:
    return float(np.clip(value, 0.0, 100.0))
