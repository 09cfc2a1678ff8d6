"""
예측 모듈

로또와 찬스의 휴리스틱 예측 기능을 제공합니다.
"""

from .lotto_predictor import LottoPredictor, generate_lotto_prediction
from .chance_predictor import ChancePredictor, generate_chance_prediction, card_name

__all__ = [
    'LottoPredictor',
    'ChancePredictor',
    'generate_lotto_prediction',
    'generate_chance_prediction',
    'card_name',
]
