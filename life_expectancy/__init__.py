"""Life Expectancy - 기대수명 추정 엔진

주요 기능:
- BMI 계산 (단위 변환 포함)
- 기대수명 추정 (rule / who / ml 전략)
- 사망 예정일 및 나이 계산
- 실시간 카운트다운
"""

__version__ = "1.0.0"
