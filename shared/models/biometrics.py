"""신체 계측 입력 모델 (공유)"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


WeightUnit = Literal["kg", "lb"]
HeightUnit = Literal["cm", "inch"]


def parse_positive(value: Union[float, str, None]) -> Optional[float]:
    """양수로 해석 가능한 값만 float로 반환"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or number <= 0 or number == float("inf"):
        return None
    return number


class BiometricInput(BaseModel):
    """몸무게/키 입력 (BMI 계산용, 일회성)

    값은 입력된 그대로 (문자열 가능) 받고 계산 시점에 해석한다.
    """

    weight_value: Optional[Union[float, str]] = Field(default=None, description="몸무게")
    weight_unit: WeightUnit = Field(default="kg", description="몸무게 단위 (kg/lb)")
    height_value: Optional[Union[float, str]] = Field(default=None, description="키")
    height_unit: HeightUnit = Field(default="cm", description="키 단위 (cm/inch)")
