"""
번호/카드 출현 빈도 집계

통계 화면용 집계입니다. 결과 파일 원문을 직접 읽으며 예측용 파서보다 관대하게
숫자를 정리합니다 (숫자와 '.' 이외 문자를 제거한 뒤 앞쪽 정수를 사용).

찬스 집계는 그림 카드를 A=1, J=11, Q=12, K=13으로 기록합니다. 예측 경로
(data_loader.parse_card_value)의 A=14 인코딩과 다르며, 화면 표시가 이 값에
맞춰져 있으므로 두 경로를 합치지 않습니다.
"""

import re
from collections import Counter
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from shared.error_handler import get_logger, log_performance
from ..utils.config import Config
from ..utils.records import (
    LOTTO_NUMBER_RANGE,
    LOTTO_STRONG_RANGE,
    FrequencyTable,
    LottoDraw,
    NumberFrequency,
)

logger = get_logger(__name__)

DEFAULT_MAX_ROWS = 2000

# 통계 화면의 무늬 기호 (CSV 컬럼 순서)
SUIT_FACES = ('♣', '♦', '♥', '♠')
STATISTICS_FACE_VALUES = {'A': 1, 'J': 11, 'Q': 12, 'K': 13}
STATISTICS_CARD_RANGE = (1, 13)

_NON_NUMERIC = re.compile(r'[^0-9.]')
_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')
_FACE_MARKER = re.compile(r'[AJQK]')


def _leading_int(value: str) -> Optional[int]:
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _clean_int(value: str) -> Optional[int]:
    return _leading_int(_NON_NUMERIC.sub('', value))


def _data_lines(csv_content: str, max_rows: int) -> List[str]:
    """헤더를 제외한 앞쪽 max_rows 개 행"""
    return csv_content.split('\n')[1:][:max_rows]


def _split_columns(line: str) -> List[str]:
    return [column.strip() for column in line.split(',')]


def _build_frequencies(
    counts: Counter,
    denominator: int,
    with_face: bool = False
) -> Tuple[NumberFrequency, ...]:
    """횟수 내림차순으로 정렬된 빈도 목록 (동률은 처음 등장한 순서)"""
    result = []
    for key, count in counts.most_common():
        percentage = (count * 100) // denominator if denominator else 0
        if not with_face:
            result.append(NumberFrequency(number=key, count=count, percentage=percentage))
        else:
            number, face = key
            result.append(NumberFrequency(number=number, count=count, percentage=percentage, face=face))
    return tuple(result)


@log_performance
def aggregate_lotto_frequencies(csv_content: str, max_rows: int = DEFAULT_MAX_ROWS) -> FrequencyTable:
    """
    로또 번호 및 강번호 빈도 집계

    Args:
        csv_content: 로또 결과 CSV 원문
        max_rows: 읽을 최대 데이터 행 수

    Returns:
        일반 번호/강번호 빈도표. 집계된 회차가 없으면 빈 표
    """
    regular_counts: Counter = Counter()
    strong_counts: Counter = Counter()
    accepted_draws = 0

    for line in _data_lines(csv_content, max_rows):
        if not line.strip():
            continue
        columns = _split_columns(line)
        if len(columns) < 9 or _leading_int(columns[0]) is None:
            continue

        cleaned = (_clean_int(column) for column in columns[2:8])
        regular_numbers = [
            n for n in cleaned
            if n is not None and LOTTO_NUMBER_RANGE[0] <= n <= LOTTO_NUMBER_RANGE[1]
        ]
        if len(regular_numbers) != 6:
            continue
        # 그림 카드 표기가 섞인 행은 다른 게임 형식
        if any(_FACE_MARKER.search(column.upper()) for column in columns[2:9]):
            continue
        if len(set(regular_numbers)) != 6:
            continue

        accepted_draws += 1
        regular_counts.update(regular_numbers)

        strong_number = _clean_int(columns[8])
        if strong_number is not None and LOTTO_STRONG_RANGE[0] <= strong_number <= LOTTO_STRONG_RANGE[1]:
            strong_counts[strong_number] += 1

    if accepted_draws == 0:
        logger.info("집계할 로또 회차가 없습니다")
        return FrequencyTable()

    logger.debug(f"로또 빈도 집계: {accepted_draws}회차")
    return FrequencyTable(
        regular=_build_frequencies(regular_counts, accepted_draws),
        strong=_build_frequencies(strong_counts, accepted_draws)
    )


def _statistics_card_value(value: str) -> Optional[int]:
    value = value.strip().upper()
    if value in STATISTICS_FACE_VALUES:
        return STATISTICS_FACE_VALUES[value]
    return _clean_int(value)


@log_performance
def aggregate_chance_frequencies(csv_content: str, max_rows: int = DEFAULT_MAX_ROWS) -> FrequencyTable:
    """
    찬스 카드 빈도 집계

    같은 숫자라도 무늬가 다르면 따로 셉니다. 네 장 모두 읽힌 회차만 집계하며
    백분율의 분모는 (유효 회차 수 × 4)입니다. 찬스에는 강번호가 없으므로
    strong은 항상 비어 있습니다.

    Args:
        csv_content: 찬스 결과 CSV 원문
        max_rows: 읽을 최대 데이터 행 수

    Returns:
        (숫자, 무늬)별 빈도표
    """
    card_counts: Counter = Counter()
    valid_draws = 0

    for line in _data_lines(csv_content, max_rows):
        if not line.strip():
            continue
        columns = _split_columns(line)
        if len(columns) < 6 or _leading_int(columns[1]) is None:
            continue

        cards = [_statistics_card_value(column) for column in columns[2:6]]
        if None in cards:
            continue

        valid_draws += 1
        for number, face in zip(cards, SUIT_FACES):
            if STATISTICS_CARD_RANGE[0] <= number <= STATISTICS_CARD_RANGE[1]:
                card_counts[(number, face)] += 1

    if valid_draws == 0:
        logger.info("집계할 찬스 회차가 없습니다")
        return FrequencyTable()

    logger.debug(f"찬스 빈도 집계: {valid_draws}회차")
    return FrequencyTable(regular=_build_frequencies(card_counts, valid_draws * 4, with_face=True))


class FrequencyAggregator:
    """설정값(최대 행 수)을 적용하는 빈도 집계기"""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.max_rows = self.config.statistics.max_rows

    def lotto(self, csv_content: str) -> FrequencyTable:
        return aggregate_lotto_frequencies(csv_content, max_rows=self.max_rows)

    def chance(self, csv_content: str) -> FrequencyTable:
        return aggregate_chance_frequencies(csv_content, max_rows=self.max_rows)


@dataclass(frozen=True, eq=False)
class DrawSummary:
    """파싱된 로또 회차의 단순(비가중) 요약"""
    number_analysis: pd.DataFrame
    strong_number_analysis: pd.DataFrame
    pair_frequency: Dict[Tuple[int, int], int]
    total_draws: int


def _frequency_frame(counts: Counter, values: Iterable[int], total_draws: int) -> pd.DataFrame:
    frame = pd.DataFrame({
        'number': list(values),
    })
    frame['frequency'] = frame['number'].map(lambda n: counts.get(n, 0)).astype(int)
    if total_draws:
        frame['percentage'] = frame['frequency'] / total_draws * 100
    else:
        frame['percentage'] = 0.0
    return frame.sort_values('frequency', ascending=False, kind='stable').reset_index(drop=True)


def summarize_lotto_draws(draws: Sequence[LottoDraw]) -> DrawSummary:
    """
    로또 회차 요약

    1-37 모든 번호와 1-7 강번호의 출현 횟수/비율(0 포함), 번호 쌍 출현 횟수를 계산합니다.

    Args:
        draws: 파싱된 로또 회차 목록

    Returns:
        요약 결과
    """
    number_counts: Counter = Counter()
    strong_counts: Counter = Counter()
    pair_frequency: Counter = Counter()

    for draw in draws:
        number_counts.update(draw.numbers)
        strong_counts[draw.strong_number] += 1
        pair_frequency.update(combinations(sorted(draw.numbers), 2))

    total_draws = len(draws)
    return DrawSummary(
        number_analysis=_frequency_frame(
            number_counts, range(LOTTO_NUMBER_RANGE[0], LOTTO_NUMBER_RANGE[1] + 1), total_draws
        ),
        strong_number_analysis=_frequency_frame(
            strong_counts, range(LOTTO_STRONG_RANGE[0], LOTTO_STRONG_RANGE[1] + 1), total_draws
        ),
        pair_frequency=dict(pair_frequency),
        total_draws=total_draws
    )
