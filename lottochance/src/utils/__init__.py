"""
공통 유틸리티 모듈

설정, 데이터 모델, CSV 로더, 직렬화 스키마를 제공합니다.
"""
