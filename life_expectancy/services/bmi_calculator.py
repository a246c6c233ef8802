"""BMI 계산 서비스"""

import math
from typing import Optional, Union

from shared.models import BiometricInput
from shared.models.biometrics import parse_positive


LB_TO_KG = 0.453592
INCH_TO_M = 0.0254


def round_half_up(value: float, digits: int = 1) -> float:
    """소수점 반올림 (0.05 -> 0.1, 은행가 반올림 아님)"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def calculate_bmi(
    weight: Union[float, str, None],
    weight_unit: str,
    height: Union[float, str, None],
    height_unit: str,
) -> Optional[float]:
    """
    몸무게/키로 BMI 계산

    Args:
        weight: 몸무게 (kg 또는 lb)
        weight_unit: "kg" | "lb"
        height: 키 (cm 또는 inch)
        height_unit: "cm" | "inch"

    Returns:
        소수점 1자리 BMI, 값이 없거나 0 이하이면 None
    """
    weight_value = parse_positive(weight)
    height_value = parse_positive(height)
    if weight_value is None or height_value is None:
        return None

    weight_kg = weight_value * LB_TO_KG if weight_unit == "lb" else weight_value
    if height_unit == "inch":
        height_m = height_value * INCH_TO_M
    else:
        height_m = height_value / 100

    return round_half_up(weight_kg / (height_m * height_m), 1)


class BMICalculator:
    """BMI 계산기 (마지막 계산값 보관)

    잘못된 입력은 무시하고 이전 값을 그대로 둔다.
    """

    def __init__(self):
        self._bmi: Optional[float] = None

    @property
    def bmi(self) -> Optional[float]:
        """마지막으로 계산된 BMI"""
        return self._bmi

    def calculate(self, biometrics: BiometricInput) -> Optional[float]:
        """
        BMI 계산 후 보관

        Returns:
            새로 계산된 BMI, 입력이 잘못되면 None (보관값 유지)
        """
        bmi = calculate_bmi(
            biometrics.weight_value,
            biometrics.weight_unit,
            biometrics.height_value,
            biometrics.height_unit,
        )
        if bmi is not None:
            self._bmi = bmi
        return bmi

    def reset(self) -> None:
        self._bmi = None
