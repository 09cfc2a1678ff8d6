"""
빈도표 시각화

통계 빈도표를 막대 그래프 이미지로 저장합니다.
"""

from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from shared.error_handler import get_logger, safe_execute
from ..utils.records import FrequencyTable

logger = get_logger(__name__)


def frequency_table_to_frame(table: FrequencyTable, category: str = 'regular') -> pd.DataFrame:
    """
    빈도표를 데이터프레임으로 변환

    Args:
        table: 빈도표
        category: 'regular' 또는 'strong'

    Returns:
        label, number, count, percentage, face 컬럼의 데이터프레임
    """
    entries = getattr(table, category)
    return pd.DataFrame(
        [
            {
                'label': entry.key,
                'number': entry.number,
                'count': entry.count,
                'percentage': entry.percentage,
                'face': entry.face,
            }
            for entry in entries
        ],
        columns=['label', 'number', 'count', 'percentage', 'face']
    )


@safe_execute(default_return=None)
def plot_frequency_table(
    table: FrequencyTable,
    filepath: str,
    title: str = 'Number frequency',
    category: str = 'regular'
) -> Optional[str]:
    """
    빈도표 막대 그래프 저장

    Args:
        table: 빈도표
        filepath: 저장 경로
        title: 그래프 제목
        category: 'regular' 또는 'strong'

    Returns:
        저장된 경로, 그릴 데이터가 없거나 실패하면 None
    """
    frame = frequency_table_to_frame(table, category)
    if frame.empty:
        logger.warning(f"그래프로 그릴 데이터가 없습니다: {title}")
        return None

    sns.set_theme(style='whitegrid')
    fig, ax = plt.subplots(figsize=(max(6, len(frame) * 0.35), 4))
    try:
        sns.barplot(data=frame, x='label', y='count', order=list(frame['label']), color='steelblue', ax=ax)
        ax.set_title(title)
        ax.set_xlabel('')
        ax.set_ylabel('count')
        ax.tick_params(axis='x', labelrotation=90)
        fig.tight_layout()

        save_path = Path(filepath)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path)
    finally:
        plt.close(fig)

    logger.info(f"그래프 저장 완료: {filepath}")
    return str(filepath)
