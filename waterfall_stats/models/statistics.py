"""
Statistical Analysis Result Models

이 모듈은 통계 엔진이 반환하는 결과 엔티티와 입력 옵션 모델을 정의합니다.
모든 결과 모델은 호출마다 새로 생성되며 생성 이후 변경되지 않습니다.
"""

from typing import List, Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from enum import Enum
import logging

logger = logging.getLogger(__name__)

FROZEN = ConfigDict(frozen=True)


class OutlierSeverityEnum(str, Enum):
    """이상치 심각도"""
    MILD = "mild"
    EXTREME = "extreme"


class OutlierDirectionEnum(str, Enum):
    """이상치 방향"""
    LOWER = "lower"
    UPPER = "upper"


class ImpactLevelEnum(str, Enum):
    """분산 기여도 영향 수준"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class VarianceSignificanceEnum(str, Enum):
    """그룹 분산 분해 결과의 설명적 유의성"""
    SIGNIFICANT = "significant"
    MODERATE = "moderate"
    NOT_SIGNIFICANT = "not significant"


class TrendDirectionEnum(str, Enum):
    """추세 방향"""
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class TrendStrengthEnum(str, Enum):
    """추세 강도"""
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class ItemKindEnum(str, Enum):
    """품질 평가 입력 항목 분류"""
    MISSING = "missing"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


# ---------------------------------------------------------------------------
# 요약 통계
# ---------------------------------------------------------------------------

class Quartiles(BaseModel):
    """사분위수"""
    q1: float = Field(..., description="1사분위수")
    q2: float = Field(..., description="중앙값")
    q3: float = Field(..., description="3사분위수")
    iqr: float = Field(..., description="사분위 범위 (q3 - q1)")

    model_config = FROZEN


class Percentiles(BaseModel):
    """백분위수"""
    p5: float
    p10: float
    p25: float
    p75: float
    p90: float
    p95: float

    model_config = FROZEN


class StatisticalSummary(BaseModel):
    """요약 통계 결과"""
    count: int = Field(..., description="유효한 값의 개수")
    sum: float = Field(..., description="합계")
    mean: float = Field(..., description="평균")
    median: float = Field(..., description="중앙값")
    mode: List[float] = Field(default_factory=list, description="최빈값 (오름차순)")
    variance: float = Field(..., description="표본 분산 (n-1)")
    standard_deviation: float = Field(..., description="표본 표준편차")
    min: float = Field(..., description="최솟값")
    max: float = Field(..., description="최댓값")
    range: float = Field(..., description="범위 (max - min)")
    quartiles: Quartiles = Field(..., description="사분위수")
    percentiles: Percentiles = Field(..., description="백분위수")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "count": 1,
                "sum": 5.0,
                "mean": 5.0,
                "median": 5.0,
                "mode": [5.0],
                "variance": 0.0,
                "standard_deviation": 0.0,
                "min": 5.0,
                "max": 5.0,
                "range": 0.0,
                "quartiles": {"q1": 5.0, "q2": 5.0, "q3": 5.0, "iqr": 0.0},
                "percentiles": {"p5": 5.0, "p10": 5.0, "p25": 5.0, "p75": 5.0, "p90": 5.0, "p95": 5.0}
            }
        }
    )


# ---------------------------------------------------------------------------
# 이상치 분석
# ---------------------------------------------------------------------------

class CleanRecord(BaseModel):
    """이상치가 아닌 값"""
    value: float
    index: int = Field(..., description="원본 시퀀스에서의 위치")
    label: Optional[str] = None

    model_config = FROZEN


class OutlierRecord(BaseModel):
    """이상치로 분류된 값"""
    value: float
    index: int = Field(..., description="원본 시퀀스에서의 위치")
    label: Optional[str] = None
    severity: OutlierSeverityEnum
    direction: OutlierDirectionEnum

    model_config = FROZEN


class OutlierThresholds(BaseModel):
    """IQR 펜스 경계값"""
    lower_bound: float
    upper_bound: float
    extreme_lower_bound: float
    extreme_upper_bound: float

    model_config = FROZEN


class OutlierStatistics(BaseModel):
    """이상치 판정에 사용된 통계"""
    mean: float = 0.0
    median: float = 0.0
    q1: float = 0.0
    q3: float = 0.0
    iqr: float = 0.0

    model_config = FROZEN


class OutlierSummary(BaseModel):
    """이상치 개수 요약 (레코드 목록에서 파생)"""
    total_outliers: int = 0
    mild_outliers: int = 0
    extreme_outliers: int = 0
    outlier_percentage: float = 0.0

    model_config = FROZEN


class OutlierAnalysis(BaseModel):
    """이상치 분석 결과"""
    outliers: List[OutlierRecord] = Field(default_factory=list)
    clean_data: List[CleanRecord] = Field(default_factory=list)
    method: str = Field("iqr", description="판정 방법")
    thresholds: Optional[OutlierThresholds] = Field(None, description="펜스 경계값 (데이터가 없으면 None)")
    statistics: OutlierStatistics = Field(default_factory=OutlierStatistics)
    summary: OutlierSummary = Field(default_factory=OutlierSummary)

    model_config = FROZEN


# ---------------------------------------------------------------------------
# 데이터 품질
# ---------------------------------------------------------------------------

class DataQualityOptions(BaseModel):
    """데이터 품질 평가 옵션"""
    expected_range: Optional[Tuple[float, float]] = Field(
        None, alias="expectedRange", description="허용 값 범위 (하한, 상한)"
    )
    allowed_types: List[ItemKindEnum] = Field(
        default_factory=lambda: [ItemKindEnum.NUMBER], alias="allowedTypes", description="허용 타입"
    )
    null_tolerance: float = Field(0.05, alias="nullTolerance", description="허용 결측 비율")
    duplicate_tolerance: float = Field(0.10, alias="duplicateTolerance", description="허용 중복 비율")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "expected_range": [0, 100],
                "allowed_types": ["number"],
                "null_tolerance": 0.05,
                "duplicate_tolerance": 0.1
            }
        }
    )

    @field_validator('null_tolerance', 'duplicate_tolerance')
    @classmethod
    def validate_tolerance(cls, v):
        """허용 비율 검증"""
        if not 0 <= v <= 1:
            raise ValueError('허용 비율은 0과 1 사이의 값이어야 합니다')
        return v

    @field_validator('allowed_types')
    @classmethod
    def validate_allowed_types(cls, v):
        if ItemKindEnum.MISSING in v:
            raise ValueError("'missing' cannot be an allowed type")
        return v

    @model_validator(mode='after')
    def validate_expected_range(self):
        if self.expected_range is not None and self.expected_range[0] > self.expected_range[1]:
            raise ValueError('expected_range lower bound must not exceed its upper bound')
        return self


class QualityAssessment(BaseModel):
    """데이터 품질 평가 결과 (모든 점수는 0-100)"""
    completeness: float = Field(..., description="결측이 아닌 항목 비율")
    consistency: float = Field(..., description="100 - 변동계수 x 100")
    accuracy: float = Field(..., description="기대 범위 내 항목 비율")
    validity: float = Field(..., description="허용 타입 항목 비율")
    duplicate_count: int = Field(..., description="중복된 고유 값의 개수")
    anomalies: OutlierAnalysis = Field(..., description="숫자 항목에 대한 이상치 분석")
    issues: List[str] = Field(default_factory=list, description="발견된 문제 목록")
    recommendations: List[str] = Field(default_factory=list, description="권장사항")

    model_config = FROZEN


# ---------------------------------------------------------------------------
# 분산 분석
# ---------------------------------------------------------------------------

class LabeledValue(BaseModel):
    """라벨이 붙은 값"""
    label: str
    value: float

    model_config = FROZEN


class VarianceContribution(BaseModel):
    """항목별 분산 기여도"""
    label: str
    value: float
    variance: float = Field(..., description="(value - mean)^2")
    contribution_pct: float = Field(..., description="전체 분산 대비 기여율 (%)")

    model_config = FROZEN


class SignificantFactor(BaseModel):
    """주요 분산 요인"""
    label: str
    impact: ImpactLevelEnum
    variance: float

    model_config = FROZEN


class VarianceAnalysis(BaseModel):
    """분산 분석 결과"""
    total_variance: float
    positive_variance: float
    negative_variance: float
    within_group_variance: float = 0.0
    between_group_variance: float = 0.0
    f_statistic: float = 0.0
    significance: VarianceSignificanceEnum = VarianceSignificanceEnum.NOT_SIGNIFICANT
    contributions: List[VarianceContribution] = Field(default_factory=list)
    significant_factors: List[SignificantFactor] = Field(default_factory=list)

    model_config = FROZEN


# ---------------------------------------------------------------------------
# 추세 분석
# ---------------------------------------------------------------------------

class TrendPoint(BaseModel):
    """회귀 입력 포인트"""
    x: float
    y: float

    model_config = FROZEN


class ConfidenceInterval(BaseModel):
    """신뢰구간"""
    lower: float
    upper: float

    model_config = FROZEN


class TrendProjection(BaseModel):
    """예측 값"""
    period: float
    value: float
    confidence_interval: ConfidenceInterval

    model_config = FROZEN


class TrendAnalysis(BaseModel):
    """추세 분석 결과"""
    slope: float
    intercept: float
    correlation: float
    r_squared: float
    direction: TrendDirectionEnum
    strength: TrendStrengthEnum
    confidence_pct: float = Field(..., description="|correlation| x 100")
    projections: List[TrendProjection] = Field(default_factory=list)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "slope": 2.0,
                "intercept": 0.0,
                "correlation": 1.0,
                "r_squared": 1.0,
                "direction": "increasing",
                "strength": "strong",
                "confidence_pct": 100.0,
                "projections": [
                    {"period": 4, "value": 8.0, "confidence_interval": {"lower": 5.7, "upper": 10.3}}
                ]
            }
        }
    )


class WaterfallStatistics(BaseModel):
    """워터폴 데이터 종합 통계"""
    summary: StatisticalSummary
    variance: VarianceAnalysis
    quality: QualityAssessment
    insights: List[str] = Field(default_factory=list)

    model_config = FROZEN
