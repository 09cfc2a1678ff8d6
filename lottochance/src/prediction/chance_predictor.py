"""
찬스 카드 예측

무늬마다 독립적으로, 상위 조합에 등장한 카드 중 가중 빈도가 가장 높은 카드를 고릅니다.
무늬끼리 같은 카드가 나와도 됩니다.
"""

from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from shared.error_handler import get_logger, log_performance
from ..analysis.pattern_analyzer import PatternAnalyzer, PatternStats
from ..utils.config import Config
from ..utils.records import CHANCE_CARD_RANGE, SUITS, ChanceDraw, ChancePrediction
from .scoring import (
    CHANCE_CONFIDENCE_WEIGHTS,
    clamp_confidence,
    pattern_confidence,
    seasonal_confidence,
)

logger = get_logger(__name__)

CARD_NAMES = {
    7: '7',
    8: '8',
    9: '9',
    10: '10',
    11: 'J',
    12: 'Q',
    13: 'K',
    14: 'A',
}


def card_name(value: int) -> str:
    """카드 값을 표시용 이름으로 변환 (11→J, 12→Q, 13→K, 14→A)"""
    return CARD_NAMES.get(value, str(value))


def _combo_label(combo) -> str:
    return '-'.join(card_name(value) for value in combo)


def _join_cards(values) -> str:
    return ', '.join(card_name(value) for value in values) or 'none'


class ChancePredictor:
    """찬스 예측기"""

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
    def predict(self, draws: Sequence[ChanceDraw]) -> Optional[ChancePrediction]:
        """
        예측 생성

        Args:
            draws: 오래된 순서의 찬스 회차 목록

        Returns:
            예측 결과. 회차가 없어 예측할 수 없으면 None
        """
        recent = self.analyzer.window(draws)
        if not recent:
            logger.warning("찬스 회차가 없어 예측할 수 없습니다")
            return None

        stats = self.analyzer.analyze(
            [draw.cards for draw in recent],
            [draw.date for draw in recent],
            CHANCE_CARD_RANGE,
            slot_names=SUITS
        )

        pool = stats.candidate_pool()
        picks: Dict[str, Tuple[int, float]] = {}
        for suit in SUITS:
            best = self._best_card(stats, suit, pool)
            if best is None:
                logger.warning(f"{suit} 무늬의 빈도 정보가 없어 예측할 수 없습니다")
                return None
            picks[suit] = best

        selection = [card for card, _ in picks.values()]
        card_score = sum(stats.percentage(weight) for _, weight in picks.values()) / len(SUITS)
        weights = CHANCE_CONFIDENCE_WEIGHTS
        confidence = clamp_confidence(
            card_score * weights['card']
            + pattern_confidence(stats, selection) * weights['pattern']
            + seasonal_confidence(stats) * weights['seasonal']
        )

        logger.debug(
            "찬스 예측: "
            + ', '.join(f"{suit}={card_name(card)}" for suit, (card, _) in picks.items())
            + f", 신뢰도={confidence:.1f}%"
        )

        return ChancePrediction(
            clubs=picks['clubs'][0],
            diamonds=picks['diamonds'][0],
            hearts=picks['hearts'][0],
            spades=picks['spades'][0],
            confidence=confidence,
            patterns=tuple(self._describe_patterns(stats, picks)),
            hot_cards=stats.hot,
            cold_cards=stats.cold,
            seasonal_patterns=tuple(self._describe_seasonal(stats))
        )

    @staticmethod
    def _best_card(stats: PatternStats, suit: str, pool) -> Optional[Tuple[int, float]]:
        """조합 후보에 있는 카드 중 가중 빈도 최고, 없으면 전체 중 최고"""
        ranked = stats.ranked_frequency(suit)
        if not ranked:
            return None
        for card, weight in ranked:
            if card in pool:
                return card, weight
        return ranked[0]

    @staticmethod
    def _describe_patterns(stats: PatternStats, picks: Dict[str, Tuple[int, float]]) -> List[str]:
        patterns = []
        for label, tier in (('combinations', stats.pairs), ('triplets', stats.triplets), ('quads', stats.quads)):
            if tier:
                patterns.append(f"Common {label}: {', '.join(_combo_label(combo) for combo, _ in tier)}")

        for suit, (card, _) in picks.items():
            draws_ago = stats.slot_last_seen.get(suit, {}).get(card)
            patterns.append(f"{suit.capitalize()} {card_name(card)} last appeared {draws_ago} draws ago")

        patterns.append(f"Hot cards: {_join_cards(stats.hot)}")
        patterns.append(f"Cold cards: {_join_cards(stats.cold)}")
        return patterns

    @staticmethod
    def _describe_seasonal(stats: PatternStats) -> List[str]:
        seasonal = []
        if stats.monthly_top:
            favorites = ', '.join(f"{card_name(card)} ({count} times)" for card, count in stats.monthly_top)
            seasonal.append(f"Month {stats.month} favorites: {favorites}")
        if stats.weekly_top:
            favorites = ', '.join(f"{card_name(card)} ({count} times)" for card, count in stats.weekly_top)
            seasonal.append(f"{stats.weekday} favorites: {favorites}")
        return seasonal


def generate_chance_prediction(
    draws: Sequence[ChanceDraw],
    config: Optional[Config] = None,
    now: Optional[datetime] = None
) -> Optional[ChancePrediction]:
    """
    찬스 예측 생성 (편의 함수)

    Args:
        draws: 오래된 순서의 찬스 회차 목록
        config: 설정 객체
        now: 계절성 분석 기준 시각

    Returns:
        예측 결과 또는 None (예측 불가)
    """
    config = config or Config()
    return ChancePredictor(config, PatternAnalyzer(config, now=now)).predict(draws)
