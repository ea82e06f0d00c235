from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ProfileIn(BaseModel):
    measurements: Dict[str, Any] = Field(default_factory=dict)
    gender: Optional[str] = None
    unit: Optional[str] = None


class ProfileOut(BaseModel):
    measurements: Dict[str, float]
    gender: Optional[str] = None
    timestamp: Optional[str] = None


class SizeRecommendRequest(BaseModel):
    # Omit to use the saved profile
    measurements: Optional[Dict[str, Any]] = None
    unit: Optional[str] = None


class BrandSize(BaseModel):
    brand: str
    size: str
    detail: str
    confidence: float


class SizeRecommendResponse(BaseModel):
    sizes: Dict[str, List[BrandSize]]
