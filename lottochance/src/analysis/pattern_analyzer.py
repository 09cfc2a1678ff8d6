"""
추첨 번호의 패턴을 분석하는 모듈

이 모듈은 최근 회차(기본 1000회)를 대상으로 다음과 같은 정보를 제공합니다:
- 최근 회차일수록 가중치를 크게 준 번호별 출현 빈도
- 2개/3개/4개 조합(쌍, 삼중, 사중)의 가중 동시 출현
- 핫/콜드 번호와 마지막 출현 이후 경과 회차
- 월별, 요일별 출현 횟수

로또(6개 번호)와 찬스(4장 카드) 모두 "회차별 값 목록"으로 받아 같은 방식으로 처리합니다.
"""

import itertools
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np
import pandas as pd

from shared.error_handler import get_logger, log_performance
from ..utils.config import Config

# 로거 설정
logger = get_logger(__name__)

Combination = Tuple[int, ...]
RankedCombinations = List[Tuple[Combination, float]]

# 결과 파일의 날짜는 일/월/년 순서
DATE_FORMATS = ('%d/%m/%Y', '%d/%m/%y', '%d.%m.%Y', '%Y-%m-%d')

COMBINATION_SIZES = (2, 3, 4)

@dataclass
class PatternAnalysisConfig:
    """패턴 분석 설정"""
    window_size: int = 1000
    hot_window: int = 50
    cold_threshold: int = 100
    top_pairs: int = 5
    top_triplets: int = 3
    top_quads: int = 2
    seasonal_top: int = 3

@dataclass(frozen=True)
class PatternStats:
    """패턴 분석 결과"""
    window_size: int
    weighted_frequency: Dict[int, float]
    last_seen: Dict[int, int]
    pairs: RankedCombinations
    triplets: RankedCombinations
    quads: RankedCombinations
    hot: Tuple[int, ...]
    cold: Tuple[int, ...]
    monthly_top: List[Tuple[int, int]]
    weekly_top: List[Tuple[int, int]]
    month: int
    weekday: str
    slot_frequency: Dict[str, Dict[int, float]] = field(default_factory=dict)
    slot_last_seen: Dict[str, Dict[int, int]] = field(default_factory=dict)

    @property
    def tiers(self) -> Tuple[RankedCombinations, RankedCombinations, RankedCombinations]:
        """(쌍, 삼중, 사중)"""
        return (self.pairs, self.triplets, self.quads)

    def candidate_pool(self) -> Set[int]:
        """상위 조합 어디에든 등장한 값"""
        return {
            value
            for tier in (self.quads, self.triplets, self.pairs)
            for combo, _ in tier
            for value in combo
        }

    def ranked_frequency(self, slot: Optional[str] = None) -> List[Tuple[int, float]]:
        """
        가중 빈도 내림차순 목록

        Args:
            slot: 무늬 이름. None이면 전체 값 기준

        Returns:
            (값, 가중 빈도) 목록. 동률은 처음 등장한 순서
        """
        source = self.weighted_frequency if slot is None else self.slot_frequency.get(slot, {})
        return sorted(source.items(), key=lambda item: item[1], reverse=True)

    def percentage(self, weight: float) -> float:
        """가중 빈도를 분석 회차 수 대비 백분율로 변환"""
        if self.window_size == 0:
            return 0.0
        return weight / self.window_size * 100

def recency_weights(size: int) -> np.ndarray:
    """
    회차별 가중치

    가장 오래된 회차(인덱스 0)는 1, 가장 최근 회차는 2에 가까운 값을 가집니다.
    """
    if size <= 0:
        return np.empty(0)
    return 1 + np.arange(size) / size

def parse_draw_dates(dates: Iterable[str]) -> pd.Series:
    """
    날짜 문자열을 datetime으로 변환

    알려진 형식을 차례로 시도하며, 어느 형식에도 맞지 않는 값은 NaT가 됩니다.
    예외를 발생시키지 않습니다.
    """
    raw = pd.Series(list(dates), dtype='object').fillna('').astype(str).str.strip()
    parsed = pd.Series(pd.NaT, index=raw.index, dtype='datetime64[ns]')

    for fmt in DATE_FORMATS:
        missing = parsed.isna()
        if not missing.any():
            break
        parsed[missing] = pd.to_datetime(raw[missing], format=fmt, errors='coerce')

    return parsed

class PatternAnalyzer:
    """추첨 패턴 분석"""

    def __init__(self, config: Optional[Config] = None, now: Optional[datetime] = None):
        """
        패턴 분석기 초기화

        Args:
            config: 설정 객체
            now: 계절성 분석 기준 시각 (None이면 분석 시점의 현재 시각)
        """
        self.config = config or Config()
        self.pattern_config = PatternAnalysisConfig(**self.config.get('pattern_analysis', {}))
        self.now = now

    def window(self, draws: Sequence) -> list:
        """최근 window_size 회차"""
        start = max(len(draws) - self.pattern_config.window_size, 0)
        return list(draws[start:])

    @log_performance
    def analyze(
        self,
        value_sets: Sequence[Sequence[int]],
        dates: Sequence[str],
        value_range: Tuple[int, int],
        slot_names: Optional[Sequence[str]] = None
    ) -> PatternStats:
        """
        패턴 분석 수행

        Args:
            value_sets: 오래된 순서의 회차별 값 목록
            dates: value_sets와 같은 순서의 날짜 문자열
            value_range: 콜드 판정에 사용할 값 범위 (최소, 최대)
            slot_names: 값 위치별 이름 (찬스의 무늬). 주면 위치별 빈도도 계산

        Returns:
            분석 결과
        """
        if len(value_sets) != len(dates):
            raise ValueError("회차 수와 날짜 수가 다릅니다.")

        value_sets = [tuple(values) for values in self.window(value_sets)]
        dates = self.window(dates)
        size = len(value_sets)
        weights = recency_weights(size)

        weighted_frequency: Dict[int, float] = defaultdict(float)
        last_seen: Dict[int, int] = {}
        slot_frequency = {name: defaultdict(float) for name in slot_names or ()}
        slot_last_seen: Dict[str, Dict[int, int]] = {name: {} for name in slot_names or ()}
        combination_weights = {k: defaultdict(float) for k in COMBINATION_SIZES}

        for index, values in enumerate(value_sets):
            weight = float(weights[index])
            draws_ago = size - 1 - index

            for value in values:
                weighted_frequency[value] += weight
                last_seen[value] = draws_ago

            for name, value in zip(slot_names or (), values):
                slot_frequency[name][value] += weight
                slot_last_seen[name][value] = draws_ago

            ordered = sorted(values)
            for k, accumulator in combination_weights.items():
                for combo in itertools.combinations(ordered, k):
                    accumulator[combo] += weight

        hot = self._hot_values(value_sets)
        cold = self._cold_values(value_range, hot, last_seen)
        monthly_top, weekly_top, now = self._seasonal_top(value_sets, dates)

        logger.debug(
            f"패턴 분석 완료: {size}회차, 핫 {len(hot)}개, 콜드 {len(cold)}개"
        )

        return PatternStats(
            window_size=size,
            weighted_frequency=dict(weighted_frequency),
            last_seen=last_seen,
            pairs=self._top(combination_weights[2], self.pattern_config.top_pairs),
            triplets=self._top(combination_weights[3], self.pattern_config.top_triplets),
            quads=self._top(combination_weights[4], self.pattern_config.top_quads),
            hot=hot,
            cold=cold,
            monthly_top=monthly_top,
            weekly_top=weekly_top,
            month=now.month,
            weekday=now.strftime('%A'),
            slot_frequency={name: dict(freq) for name, freq in slot_frequency.items()},
            slot_last_seen=slot_last_seen
        )

    @staticmethod
    def _top(accumulator: Dict[Combination, float], limit: int) -> RankedCombinations:
        return sorted(accumulator.items(), key=lambda item: item[1], reverse=True)[:limit]

    def _hot_values(self, value_sets: List[Tuple[int, ...]]) -> Tuple[int, ...]:
        """최근 hot_window 회차에 등장한 값 (처음 등장한 순서)"""
        hot_count = min(self.pattern_config.hot_window, len(value_sets))
        recent = value_sets[len(value_sets) - hot_count:]
        return tuple(dict.fromkeys(value for values in recent for value in values))

    def _cold_values(
        self,
        value_range: Tuple[int, int],
        hot: Tuple[int, ...],
        last_seen: Dict[int, int]
    ) -> Tuple[int, ...]:
        """핫이 아니면서 한 번도 안 나왔거나 cold_threshold 회차보다 오래전에 나온 값"""
        hot_set = set(hot)
        threshold = self.pattern_config.cold_threshold
        return tuple(
            value
            for value in range(value_range[0], value_range[1] + 1)
            if value not in hot_set and (value not in last_seen or last_seen[value] > threshold)
        )

    def _seasonal_top(
        self,
        value_sets: List[Tuple[int, ...]],
        dates: List[str]
    ) -> Tuple[List[Tuple[int, int]], List[Tuple[int, int]], datetime]:
        """현재 월/요일에 가장 많이 나온 값 (가중치 없는 횟수)"""
        now = self.now or datetime.now()
        if not value_sets:
            return [], [], now

        frame = pd.DataFrame({
            'date': parse_draw_dates(dates),
            'value': pd.Series(value_sets, dtype='object')
        }).dropna(subset=['date'])
        if frame.empty:
            return [], [], now

        frame = frame.explode('value')
        frame['value'] = frame['value'].astype(int)

        monthly = frame.loc[frame['date'].dt.month == now.month, 'value']
        weekly = frame.loc[frame['date'].dt.dayofweek == now.weekday(), 'value']
        return self._top_counts(monthly), self._top_counts(weekly), now

    def _top_counts(self, values: pd.Series) -> List[Tuple[int, int]]:
        if values.empty:
            return []
        counts = values.value_counts(sort=False).sort_values(ascending=False, kind='stable')
        return [
            (int(value), int(count))
            for value, count in counts.head(self.pattern_config.seasonal_top).items()
        ]
