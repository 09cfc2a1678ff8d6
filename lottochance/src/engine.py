"""
분석 엔진

설정, 파서, 빈도 집계기, 예측기를 묶어 UI 계층이 호출하는 진입점을 제공합니다.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Optional

from shared.error_handler import get_logger
from .analysis.frequency import FrequencyAggregator
from .analysis.pattern_analyzer import PatternAnalyzer
from .prediction.chance_predictor import ChancePredictor
from .prediction.lotto_predictor import LottoPredictor
from .utils.config import Config
from .utils.data_loader import DataManager
from .utils.records import ChancePrediction, LottoPrediction, StatisticsData
from .utils.schemas import dump_record

logger = get_logger(__name__)


class LotteryEngine:
    """로또/찬스 분석 엔진"""

    def __init__(self, config: Optional[Config] = None, now: Optional[datetime] = None):
        """
        엔진 초기화

        Args:
            config: 설정 객체
            now: 계절성 분석 기준 시각 (None이면 분석 시점)
        """
        self.config = config or Config()
        self.data_manager = DataManager(self.config)
        self.aggregator = FrequencyAggregator(self.config)
        self.analyzer = PatternAnalyzer(self.config, now=now)
        self.lotto_predictor = LottoPredictor(self.config, self.analyzer)
        self.chance_predictor = ChancePredictor(self.config, self.analyzer)

    def build_statistics(self, lotto_csv: str, chance_csv: str) -> StatisticsData:
        """
        두 게임의 빈도표 생성

        두 집계는 서로 데이터를 공유하지 않으므로 병렬로 실행합니다.

        Args:
            lotto_csv: 로또 결과 CSV 원문
            chance_csv: 찬스 결과 CSV 원문

        Returns:
            통계 묶음
        """
        with ThreadPoolExecutor(max_workers=self.config.statistics.num_workers) as executor:
            lotto_future = executor.submit(self.aggregator.lotto, lotto_csv)
            chance_future = executor.submit(self.aggregator.chance, chance_csv)
            statistics = StatisticsData(
                lotto_numbers=lotto_future.result(),
                chance_numbers=chance_future.result()
            )

        logger.info(
            f"통계 생성 완료: 로또 {len(statistics.lotto_numbers.regular)}개, "
            f"찬스 {len(statistics.chance_numbers.regular)}개 항목"
        )
        return statistics

    def predict_lotto(self, csv_content: str) -> Optional[LottoPrediction]:
        """
        로또 CSV를 파싱해 예측 생성

        Raises:
            NoValidDrawsError: 유효한 회차가 없는 경우
        """
        parsed = self.data_manager.load_lotto(csv_content)
        return self.lotto_predictor.predict(parsed.draws)

    def predict_chance(self, csv_content: str) -> Optional[ChancePrediction]:
        """
        찬스 CSV를 파싱해 예측 생성

        Raises:
            NoValidDrawsError: 유효한 회차가 없는 경우
        """
        parsed = self.data_manager.load_chance(csv_content)
        return self.chance_predictor.predict(parsed.draws)

    @staticmethod
    def export(record) -> dict:
        """레코드를 캐시/화면용 JSON 딕셔너리로 변환"""
        return dump_record(record)
