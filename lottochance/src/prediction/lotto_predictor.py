"""
로또 번호 예측

최근 회차의 조합 패턴, 핫/콜드 번호, 가중 빈도를 순서대로 사용해 6개 번호와
강번호를 고르고 신뢰도를 계산합니다.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from shared.error_handler import get_logger, log_performance
from ..analysis.pattern_analyzer import PatternAnalyzer, PatternStats, recency_weights
from ..utils.config import Config
from ..utils.records import LOTTO_NUMBER_RANGE, LOTTO_NUMBERS_PER_DRAW, LottoDraw, LottoPrediction
from .scoring import (
    LOTTO_CONFIDENCE_WEIGHTS,
    clamp_confidence,
    pattern_confidence,
    seasonal_confidence,
)

logger = get_logger(__name__)


def _join(values) -> str:
    return ', '.join(str(value) for value in values) or 'none'


def _combo_label(combo) -> str:
    return '-'.join(str(value) for value in combo)


class LottoPredictor:
    """로또 예측기"""

    def __init__(self, config: Optional[Config] = None, analyzer: Optional[PatternAnalyzer] = None):
        """
        예측기 초기화

        Args:
            config: 설정 객체
            analyzer: 패턴 분석기 (None이면 config로 생성)
        """
        self.config = config or Config()
        self.analyzer = analyzer or PatternAnalyzer(self.config)

    @log_performance
    def predict(self, draws: Sequence[LottoDraw]) -> Optional[LottoPrediction]:
        """
        예측 생성

        Args:
            draws: 오래된 순서의 로또 회차 목록

        Returns:
            예측 결과. 회차가 없어 예측할 수 없으면 None
        """
        recent = self.analyzer.window(draws)
        if not recent:
            logger.warning("로또 회차가 없어 예측할 수 없습니다")
            return None

        stats = self.analyzer.analyze(
            [draw.numbers for draw in recent],
            [draw.date for draw in recent],
            LOTTO_NUMBER_RANGE
        )

        selected = self._select_numbers(stats)
        if len(selected) < LOTTO_NUMBERS_PER_DRAW:
            logger.warning(f"번호를 {len(selected)}개만 선택할 수 있어 예측할 수 없습니다")
            return None

        strong_ranking = self._rank_strong_numbers(recent)
        strong_number, strong_weight = strong_ranking[0]

        number_score = sum(
            stats.percentage(stats.weighted_frequency.get(number, 0.0)) for number in selected
        ) / LOTTO_NUMBERS_PER_DRAW
        weights = LOTTO_CONFIDENCE_WEIGHTS
        confidence = clamp_confidence(
            number_score * weights['number']
            + stats.percentage(strong_weight) * weights['strong']
            + pattern_confidence(stats, selected) * weights['pattern']
            + seasonal_confidence(stats) * weights['seasonal']
        )

        logger.debug(
            f"로또 예측: 번호={selected}, 강번호={strong_number}, 신뢰도={confidence:.1f}%"
        )

        return LottoPrediction(
            numbers=tuple(selected),
            strong_number=strong_number,
            confidence=confidence,
            patterns=tuple(self._describe_patterns(stats, selected)),
            hot_numbers=stats.hot,
            cold_numbers=stats.cold,
            seasonal_patterns=tuple(self._describe_seasonal(stats))
        )

    @staticmethod
    def _select_numbers(stats: PatternStats) -> List[int]:
        """사중 → 삼중 → 쌍 → 핫 → 콜드 → 가중 빈도 순으로 6개를 채운 뒤 오름차순 정렬"""
        selected: List[int] = []

        def take(candidates) -> None:
            for number in candidates:
                if len(selected) >= LOTTO_NUMBERS_PER_DRAW:
                    return
                if number not in selected:
                    selected.append(number)

        for tier in (stats.quads, stats.triplets, stats.pairs):
            for combo, _ in tier:
                take(combo)
        take(stats.hot)
        take(stats.cold)
        take(number for number, _ in stats.ranked_frequency())

        return sorted(selected)

    @staticmethod
    def _rank_strong_numbers(recent: Sequence[LottoDraw]):
        """강번호 가중 빈도 내림차순"""
        strong_frequency = {}
        for draw, weight in zip(recent, recency_weights(len(recent))):
            strong_frequency[draw.strong_number] = strong_frequency.get(draw.strong_number, 0.0) + float(weight)
        return sorted(strong_frequency.items(), key=lambda item: item[1], reverse=True)

    @staticmethod
    def _describe_patterns(stats: PatternStats, selected: List[int]) -> List[str]:
        patterns = []
        for label, tier in (('pairs', stats.pairs), ('triplets', stats.triplets), ('quads', stats.quads)):
            if tier:
                patterns.append(f"Common {label}: {', '.join(_combo_label(combo) for combo, _ in tier)}")

        for number in selected:
            draws_ago = stats.last_seen.get(number)
            if draws_ago is None:
                patterns.append(f"Number {number} has not appeared in the last {stats.window_size} draws")
            else:
                patterns.append(f"Number {number} last appeared {draws_ago} draws ago")

        patterns.append(f"Hot numbers: {_join(stats.hot)}")
        patterns.append(f"Cold numbers: {_join(stats.cold)}")
        return patterns

    @staticmethod
    def _describe_seasonal(stats: PatternStats) -> List[str]:
        seasonal = []
        if stats.monthly_top:
            favorites = ', '.join(f"#{number} ({count} times)" for number, count in stats.monthly_top)
            seasonal.append(f"Month {stats.month} favorites: {favorites}")
        if stats.weekly_top:
            favorites = ', '.join(f"#{number} ({count} times)" for number, count in stats.weekly_top)
            seasonal.append(f"{stats.weekday} favorites: {favorites}")
        return seasonal


def generate_lotto_prediction(
    draws: Sequence[LottoDraw],
    config: Optional[Config] = None,
    now: Optional[datetime] = None
) -> Optional[LottoPrediction]:
    """
    로또 예측 생성 (편의 함수)

    Args:
        draws: 오래된 순서의 로또 회차 목록
        config: 설정 객체
        now: 계절성 분석 기준 시각

    Returns:
        예측 결과 또는 None (예측 불가)
    """
    config = config or Config()
    return LottoPredictor(config, PatternAnalyzer(config, now=now)).predict(draws)
