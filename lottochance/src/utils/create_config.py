"""
YAML 설정 파일 생성 스크립트
"""

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .config import ParserConfig, StatisticsConfig
from ..analysis.pattern_analyzer import PatternAnalysisConfig

# 기본 설정 파일 경로
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'config' / 'lottochance.yaml'


def default_config() -> Dict[str, Any]:
    """기본 설정 딕셔너리"""
    return {
        'parser': asdict(ParserConfig()),
        'statistics': asdict(StatisticsConfig()),
        'pattern_analysis': asdict(PatternAnalysisConfig()),
    }


def write_default_config(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> Path:
    """
    기본 설정을 YAML 파일로 저장

    Args:
        config_path: 저장할 경로

    Returns:
        저장된 경로
    """
    config_path = Path(config_path)

    # 디렉토리 생성
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # YAML 파일로 저장
    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(default_config(), f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    return config_path


if __name__ == '__main__':
    path = write_default_config()
    print(f"설정 파일이 생성되었습니다: {path}")
