"""
추첨 기록 및 분석 결과 데이터 모델

모든 레코드는 불변(frozen) 데이터클래스이며, UI 계층과 캐시에 그대로 전달됩니다.
JSON 변환은 schemas 모듈이 담당합니다.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .exceptions import InvalidDrawError

# 로또: 1-37 중 6개 + 강번호 1-7
LOTTO_NUMBER_RANGE = (1, 37)
LOTTO_STRONG_RANGE = (1, 7)
LOTTO_NUMBERS_PER_DRAW = 6

# 찬스: 무늬별 카드 1장, 7-14 (11=J, 12=Q, 13=K, 14=A)
CHANCE_CARD_RANGE = (7, 14)
SUITS = ('clubs', 'diamonds', 'hearts', 'spades')


def _in_range(value: int, bounds: Tuple[int, int]) -> bool:
    return isinstance(value, int) and bounds[0] <= value <= bounds[1]


@dataclass(frozen=True)
class LottoDraw:
    """로또 추첨 1회분"""
    id: int
    date: str
    numbers: Tuple[int, ...]
    strong_number: int

    def __post_init__(self):
        numbers = tuple(self.numbers)
        object.__setattr__(self, 'numbers', numbers)

        if len(numbers) != LOTTO_NUMBERS_PER_DRAW or len(set(numbers)) != LOTTO_NUMBERS_PER_DRAW:
            raise InvalidDrawError(f"draw {self.id}: expected 6 distinct numbers, got {list(numbers)}")
        if not all(_in_range(n, LOTTO_NUMBER_RANGE) for n in numbers):
            raise InvalidDrawError(f"draw {self.id}: numbers out of range {list(numbers)}")
        if not _in_range(self.strong_number, LOTTO_STRONG_RANGE):
            raise InvalidDrawError(f"draw {self.id}: strong number out of range {self.strong_number}")


@dataclass(frozen=True)
class ChanceDraw:
    """찬스 추첨 1회분"""
    id: int
    date: str
    clubs: int
    diamonds: int
    hearts: int
    spades: int

    def __post_init__(self):
        for suit in SUITS:
            value = getattr(self, suit)
            if not _in_range(value, CHANCE_CARD_RANGE):
                raise InvalidDrawError(f"draw {self.id}: {suit} card out of range {value}")

    @property
    def cards(self) -> Tuple[int, int, int, int]:
        """무늬 순서(♣ ♦ ♥ ♠)대로 카드 값"""
        return (self.clubs, self.diamonds, self.hearts, self.spades)


@dataclass(frozen=True)
class ParseDiagnostics:
    """CSV 파싱 진단 정보"""
    total_rows: int = 0
    invalid_rows: int = 0
    valid_rows: int = 0

    @property
    def success_rate(self) -> float:
        if self.total_rows == 0:
            return 0.0
        return self.valid_rows / self.total_rows * 100


@dataclass(frozen=True)
class ParsedData:
    """파싱 결과"""
    draws: Tuple
    last_draw_id: int
    diagnostics: ParseDiagnostics = ParseDiagnostics()

    def __post_init__(self):
        object.__setattr__(self, 'draws', tuple(self.draws))


@dataclass(frozen=True)
class NumberFrequency:
    """번호(카드)별 출현 빈도"""
    number: int
    count: int
    percentage: int
    face: Optional[str] = None

    @property
    def key(self) -> str:
        """통계 화면에서 쓰는 키 (예: '7' 또는 '1-♣')"""
        if self.face is None:
            return str(self.number)
        return f"{self.number}-{self.face}"


@dataclass(frozen=True)
class FrequencyTable:
    """일반 번호와 강번호 빈도표"""
    regular: Tuple[NumberFrequency, ...] = ()
    strong: Tuple[NumberFrequency, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'regular', tuple(self.regular))
        object.__setattr__(self, 'strong', tuple(self.strong))

    @property
    def is_empty(self) -> bool:
        return not self.regular and not self.strong


@dataclass(frozen=True)
class StatisticsData:
    """두 게임의 통계 묶음"""
    lotto_numbers: FrequencyTable = FrequencyTable()
    chance_numbers: FrequencyTable = FrequencyTable()


@dataclass(frozen=True)
class LottoPrediction:
    """로또 예측 결과"""
    numbers: Tuple[int, ...]
    strong_number: int
    confidence: float
    patterns: Tuple[str, ...] = ()
    hot_numbers: Tuple[int, ...] = ()
    cold_numbers: Tuple[int, ...] = ()
    seasonal_patterns: Tuple[str, ...] = ()

    def __post_init__(self):
        for name in ('numbers', 'patterns', 'hot_numbers', 'cold_numbers', 'seasonal_patterns'):
            object.__setattr__(self, name, tuple(getattr(self, name)))


@dataclass(frozen=True)
class ChancePrediction:
    """찬스 예측 결과"""
    clubs: int
    diamonds: int
    hearts: int
    spades: int
    confidence: float
    patterns: Tuple[str, ...] = ()
    hot_cards: Tuple[int, ...] = ()
    cold_cards: Tuple[int, ...] = ()
    seasonal_patterns: Tuple[str, ...] = ()

    def __post_init__(self):
        for name in ('patterns', 'hot_cards', 'cold_cards', 'seasonal_patterns'):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def cards(self) -> Tuple[int, int, int, int]:
        return (self.clubs, self.diamonds, self.hearts, self.spades)
