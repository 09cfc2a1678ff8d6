"""
설정 관리 모듈

이 모듈은 프로젝트의 설정을 관리하는 Config 클래스를 제공합니다.
"""

from typing import Any, Dict
from dataclasses import dataclass, asdict
from pathlib import Path
import logging
import yaml

logger = logging.getLogger(__name__)

# 공식 로또 결과 파일에서 현재 컬럼 구성이 시작되기 전까지의 행 수
LEGACY_LOTTO_SKIP_ROWS = 1690

@dataclass
class ParserConfig:
    """CSV 파서 설정"""
    lotto_skip_rows: int = 0

@dataclass
class StatisticsConfig:
    """통계 집계 설정"""
    max_rows: int = 2000
    num_workers: int = 2

class Config:
    """설정 관리 클래스"""

    def __init__(self, config_dict: Dict[str, Any] = None):
        """
        설정 객체 초기화

        Args:
            config_dict: 설정 딕셔너리
        """
        self._config = config_dict or {}

        # 파서 설정 초기화
        if 'parser' in self._config:
            self.parser = ParserConfig(**self._config['parser'])
        else:
            self.parser = ParserConfig()

        # 통계 설정 초기화
        if 'statistics' in self._config:
            self.statistics = StatisticsConfig(**self._config['statistics'])
        else:
            self.statistics = StatisticsConfig()

    def get(self, key: str, default: Any = None) -> Any:
        """
        설정값 조회

        Args:
            key: 설정 키
            default: 기본값

        Returns:
            설정값
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        설정값 설정

        Args:
            key: 설정 키
            value: 설정값
        """
        self._config[key] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """
        설정 업데이트

        섹션 객체(parser, statistics)도 새 값으로 다시 만듭니다.

        Args:
            config_dict: 업데이트할 설정 딕셔너리
        """
        self._config.update(config_dict)
        self.__init__(self._config)

    def save(self, filepath: str) -> None:
        """
        설정 저장

        Args:
            filepath: 저장할 파일 경로
        """
        try:
            save_dir = Path(filepath).parent
            save_dir.mkdir(parents=True, exist_ok=True)

            # YAML 형식으로 저장
            with open(filepath, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self.to_dict(), f, allow_unicode=True, default_flow_style=False, sort_keys=False)
            logger.info(f'설정 저장 완료: {filepath}')
        except Exception as e:
            logger.error(f'설정 저장 실패: {str(e)}')
            raise

    def load(self, filepath: str) -> None:
        """
        설정 로드

        Args:
            filepath: 로드할 파일 경로
        """
        try:
            if not Path(filepath).exists():
                raise FileNotFoundError(f'설정 파일을 찾을 수 없습니다: {filepath}')

            # YAML 형식으로 로드
            with open(filepath, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
            logger.info(f'설정 로드 완료: {filepath}')

            # 설정 객체 재초기화
            self.__init__(self._config)
        except Exception as e:
            logger.error(f'설정 로드 실패: {str(e)}')
            raise

    def to_dict(self) -> Dict[str, Any]:
        """
        설정을 딕셔너리로 변환

        Returns:
            설정 딕셔너리
        """
        result = dict(self._config)
        result['parser'] = asdict(self.parser)
        result['statistics'] = asdict(self.statistics)
        result.setdefault('pattern_analysis', {})
        return result

    def __str__(self) -> str:
        """문자열 표현"""
        return str(self.to_dict())

    def __repr__(self) -> str:
        """표현식 문자열"""
        return f'Config({self.to_dict()})'
