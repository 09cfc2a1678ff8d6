"""
추첨 결과 CSV 로더

이 모듈은 공식 결과 파일(CSV 텍스트)을 검증된 추첨 기록으로 변환합니다.
예측에 쓰이는 엄격한 파서이며, 통계 화면용 관대한 집계는 analysis.frequency에 있습니다.
"""

import re
from typing import Any, Dict, List, Optional

from shared.error_handler import get_logger
from .config import Config
from .exceptions import InvalidDrawError, NoValidDrawsError
from .records import ChanceDraw, LottoDraw, ParseDiagnostics, ParsedData
from .schemas import ParsedChanceDataSchema, ParsedLottoDataSchema

# 로거 설정
logger = get_logger(__name__)

# 예측 경로의 그림 카드 값
CARD_FACE_VALUES = {'J': 11, 'Q': 12, 'K': 13, 'A': 14}

LOTTO_MIN_COLUMNS = 9
CHANCE_MIN_COLUMNS = 6

_STRICT_INT = re.compile(r"[+-]?[0-9]+")


def _strict_int(value: str) -> Optional[int]:
    """ASCII 숫자로만 된 정수. int()가 허용하는 '_' 구분자와 비ASCII 숫자는 거부"""
    value = value.strip()
    if not _STRICT_INT.fullmatch(value):
        return None
    return int(value)


def _data_lines(csv_content: str, skip_rows: int = 0) -> List[str]:
    """헤더와 skip_rows 만큼의 선행 행을 제외한 비어 있지 않은 행 목록"""
    lines = csv_content.split('\n')[1 + skip_rows:]
    return [line.strip() for line in lines if line.strip()]


def parse_card_value(value: str) -> Optional[int]:
    """
    카드 값 변환

    숫자는 7-14 범위일 때만 그대로 사용하고, J/Q/K/A는 11-14로 변환합니다.

    Args:
        value: CSV 셀 문자열

    Returns:
        카드 값, 유효하지 않으면 None
    """
    value = value.strip()
    if not value:
        return None

    number = _strict_int(value)
    if number is not None:
        return number if 7 <= number <= 14 else None

    return CARD_FACE_VALUES.get(value.upper())


def parse_lotto_csv(csv_content: str, skip_rows: int = 0) -> ParsedData:
    """
    로또 결과 CSV 파싱

    컬럼 구성: 0=회차, 1=날짜, 2-7=일반 번호 6개, 8=강번호

    Args:
        csv_content: CSV 원문
        skip_rows: 헤더 다음에 건너뛸 과거 형식 행 수

    Returns:
        파일 순서대로의 추첨 목록과 최대 회차 번호

    Raises:
        NoValidDrawsError: 유효한 행이 하나도 없는 경우
    """
    draws: List[LottoDraw] = []
    last_draw_id = 0
    total_rows = 0
    invalid_rows = 0

    for line in _data_lines(csv_content, skip_rows):
        total_rows += 1
        columns = line.split(',')
        if len(columns) < LOTTO_MIN_COLUMNS:
            logger.debug(f"컬럼 부족 ({len(columns)}): {line}")
            invalid_rows += 1
            continue

        draw_id = _strict_int(columns[0])
        numbers = [_strict_int(column) for column in columns[2:8]]
        strong_number = _strict_int(columns[8])
        if draw_id is None or strong_number is None or None in numbers:
            logger.debug(f"정수 변환 실패: {line}")
            invalid_rows += 1
            continue

        try:
            draw = LottoDraw(
                id=draw_id,
                date=columns[1].strip(),
                numbers=tuple(numbers),
                strong_number=strong_number
            )
        except InvalidDrawError as e:
            logger.debug(f"잘못된 회차 건너뜀: {e}")
            invalid_rows += 1
            continue

        draws.append(draw)
        last_draw_id = max(last_draw_id, draw_id)

    diagnostics = ParseDiagnostics(total_rows, invalid_rows, len(draws))
    logger.info(
        f"로또 파싱 완료: 전체 {total_rows}행, 유효 {len(draws)}행, "
        f"무효 {invalid_rows}행 ({diagnostics.success_rate:.1f}%)"
    )

    if not draws:
        raise NoValidDrawsError()

    return ParsedData(draws=draws, last_draw_id=last_draw_id, diagnostics=diagnostics)


def parse_chance_csv(csv_content: str) -> ParsedData:
    """
    찬스 결과 CSV 파싱

    컬럼 구성: 0=날짜, 1=회차, 2-5=클로버/다이아/하트/스페이드

    Args:
        csv_content: CSV 원문

    Returns:
        파일 순서대로의 추첨 목록, 최대 회차 번호, 진단 정보

    Raises:
        NoValidDrawsError: 유효한 행이 하나도 없는 경우
    """
    draws: List[ChanceDraw] = []
    last_draw_id = 0
    total_rows = 0
    invalid_rows = 0

    for line in _data_lines(csv_content):
        total_rows += 1
        columns = [column.strip() for column in line.split(',')]
        if len(columns) < CHANCE_MIN_COLUMNS:
            logger.debug(f"컬럼 부족 ({len(columns)}): {line}")
            invalid_rows += 1
            continue

        draw_id = _strict_int(columns[1])
        if draw_id is None:
            logger.debug(f"잘못된 회차 번호: {columns[1]}")
            invalid_rows += 1
            continue

        cards = [parse_card_value(column) for column in columns[2:6]]
        if None in cards:
            logger.debug(f"잘못된 카드 값: {columns[2:6]}")
            invalid_rows += 1
            continue

        clubs, diamonds, hearts, spades = cards
        draws.append(ChanceDraw(
            id=draw_id,
            date=columns[0],
            clubs=clubs,
            diamonds=diamonds,
            hearts=hearts,
            spades=spades
        ))
        last_draw_id = max(last_draw_id, draw_id)

    diagnostics = ParseDiagnostics(total_rows, invalid_rows, len(draws))
    logger.info(
        f"찬스 파싱 완료: 전체 {total_rows}행, 유효 {len(draws)}행, "
        f"무효 {invalid_rows}행 ({diagnostics.success_rate:.1f}%)"
    )

    if not draws:
        raise NoValidDrawsError()

    return ParsedData(draws=draws, last_draw_id=last_draw_id, diagnostics=diagnostics)


class DataManager:
    """데이터 관리자"""

    def __init__(self, config: Optional[Config] = None):
        """
        데이터 관리자 초기화

        Args:
            config: 설정 객체
        """
        self.config = config or Config()
        self.parser_config = self.config.parser

    def load_lotto(self, csv_content: str) -> ParsedData:
        """설정된 과거 형식 오프셋을 적용해 로또 CSV 로드"""
        return parse_lotto_csv(csv_content, skip_rows=self.parser_config.lotto_skip_rows)

    def load_chance(self, csv_content: str) -> ParsedData:
        """찬스 CSV 로드"""
        return parse_chance_csv(csv_content)

    def load_cached(self, payload: Dict[str, Any], game: str) -> ParsedData:
        """
        캐시에 저장된 파싱 결과(JSON) 복원

        Args:
            payload: schemas로 덤프했던 딕셔너리
            game: 'lotto' 또는 'chance'

        Returns:
            검증된 파싱 결과

        Raises:
            marshmallow.ValidationError: 캐시 데이터가 손상된 경우
        """
        if game == 'lotto':
            return ParsedLottoDataSchema().load(payload)
        if game == 'chance':
            return ParsedChanceDataSchema().load(payload)
        raise ValueError(f"알 수 없는 게임 종류입니다: {game}")
