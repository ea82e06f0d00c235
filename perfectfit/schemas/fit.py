from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class FitRequest(BaseModel):
    # Omit to use the saved profile
    user_measurements: Optional[Dict[str, Any]] = None
    garment_measurements: Dict[str, Any] = Field(default_factory=dict)
    garment_type: str
    unit: Optional[str] = None
    garment_unit: Optional[str] = None
    current_size: Optional[str] = None
    save_result: bool = False


class DimensionComparisonOut(BaseModel):
    dimension: str
    user: float
    garment: float
    difference: float
    abs_difference: float
    fit: str
    kind: str


class FitResponse(BaseModel):
    garment_type: str
    strategy: str
    overall_fit: str
    description: str
    summary: str
    problem_areas: List[str]
    size_adjustment: Optional[str] = None
    suggested_size: Optional[str] = None
    contributing_dimensions: int
    measurements: Dict[str, DimensionComparisonOut]


class AnalyzeRequest(BaseModel):
    user_measurements: Optional[Dict[str, Any]] = None
    # Omit to resolve from source + size_label
    garment_measurements: Optional[Dict[str, Any]] = None
    garment_type: str
    source: Optional[str] = None
    size_label: Optional[str] = None
    unit: Optional[str] = None
    garment_unit: Optional[str] = None
    save_result: bool = False


class DifferenceOut(BaseModel):
    measure: str
    difference: float
    absolute: float


class OverallOut(BaseModel):
    fit_level: str
    avg_difference: float
    differences: List[DifferenceOut]


class SeverityOut(BaseModel):
    user: float
    product: float
    difference: float
    status: str


class AnalyzeResponse(BaseModel):
    garment_type: str
    strategy: str
    overall: OverallOut
    details: Dict[str, SeverityOut]
    recommendations: List[str]
    garment_measurements: Dict[str, float]


class GarmentLookupResponse(BaseModel):
    source: Optional[str] = None
    brand: Optional[str] = None
    size_label: str
    garment_type: str
    measurements: Dict[str, float]
