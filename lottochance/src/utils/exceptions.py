"""
데이터 검증 오류 정의
"""


class LotteryDataError(ValueError):
    """추첨 데이터 관련 오류의 기본 클래스"""


class InvalidDrawError(LotteryDataError):
    """범위를 벗어나거나 형식이 잘못된 추첨 기록"""


class NoValidDrawsError(LotteryDataError):
    """CSV에서 유효한 추첨 기록을 하나도 찾지 못함"""

    def __init__(self, message: str = "No valid draws found in the CSV data"):
        super().__init__(message)
