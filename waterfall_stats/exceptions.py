"""
커스텀 예외 클래스 정의

통계 엔진에서 발생하는 예외들을 정의합니다.
모든 예외는 동기적으로 즉시 발생하며, 계산이 결정적이므로 재시도하지 않습니다.
"""

import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class BaseStatisticsException(Exception):
    """
    통계 엔진 예외의 기본 클래스

    모든 커스텀 예외는 이 클래스를 상속받아야 합니다.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """호출자에게 전달하기 위한 표준화된 에러 표현"""
        return {
            "message": self.message,
            "type": self.__class__.__name__,
            "details": self.details
        }


class DataEmptyException(BaseStatisticsException):
    """유효한 숫자 데이터가 하나도 없을 때 발생하는 예외"""

    def __init__(self, total_count: int = 0):
        self.total_count = total_count
        super().__init__(
            message=f"No valid numeric entries among {total_count} input values",
            details={"total_count": total_count}
        )


class InsufficientDataException(BaseStatisticsException):
    """회귀 분석에 필요한 데이터 포인트가 부족할 때 발생하는 예외"""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(
            message=f"At least {required} data points are required, got {actual}",
            details={"required": required, "actual": actual}
        )


class InvalidWindowException(BaseStatisticsException):
    """이동 평균 윈도우 크기가 유효하지 않을 때 발생하는 예외"""

    def __init__(self, window: Any, length: int):
        self.window = window
        self.length = length
        super().__init__(
            message=f"Invalid window {window!r}: must be between 1 and the series length {length}",
            details={"window": window, "length": length}
        )


class InvalidAlphaException(BaseStatisticsException):
    """지수 평활 계수가 [0, 1] 범위를 벗어날 때 발생하는 예외"""

    def __init__(self, alpha: Any):
        self.alpha = alpha
        super().__init__(
            message=f"Invalid smoothing factor {alpha!r}: must be within [0, 1]",
            details={"alpha": alpha}
        )


class InvalidArgumentException(BaseStatisticsException):
    """입력 형식이 잘못되었을 때 발생하는 예외 (시퀀스가 아님, 숫자가 아님 등)"""

    def __init__(self, message: str, argument: Optional[str] = None):
        self.argument = argument
        super().__init__(
            message=f"Invalid argument: {message}",
            details={"argument": argument}
        )
