from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException

from ..security import verify_api_key
from ..schemas.fit import GarmentLookupResponse
from ..schemas.profile import SizeRecommendRequest, SizeRecommendResponse
from ..services.archetypes import dimensions_for, normalize_archetype
from ..services.calculator import normalize_record
from ..services.garment_sources import detect_brand, resolve_garment_measurements
from ..services.profile_store import ProfileStore, get_profile_store
from ..services.size_recommender import recommend_sizes
from .deps import mock_rng, resolve_unit, user_measurements_or_profile


router = APIRouter(prefix="/sizes", tags=["sizes"], dependencies=[Depends(verify_api_key)])


@router.get("/garment", response_model=GarmentLookupResponse)
async def garment_lookup(size: str, garment_type: str, source: str | None = None) -> Dict[str, Any]:
    """Garment measurements from a brand chart, or synthetic values when the chart has no entry."""
    dimensions_for(garment_type)
    return {
        "source": source,
        "brand": detect_brand(source),
        "size_label": size,
        "garment_type": normalize_archetype(garment_type),
        "measurements": resolve_garment_measurements(source, size, garment_type, rng=mock_rng()),
    }


@router.post("/recommend", response_model=SizeRecommendResponse)
async def recommend(req: SizeRecommendRequest, store: ProfileStore = Depends(get_profile_store)) -> Dict[str, Any]:
    if req.measurements:
        profile = normalize_record(req.measurements, resolve_unit(req.unit))
    else:
        profile = normalize_record(user_measurements_or_profile(None, store), "inch")
    sizes = recommend_sizes(profile, rng=mock_rng())
    if not sizes:
        raise HTTPException(status_code=400, detail="Need chest, waist, shoe_size or height to recommend sizes")
    return {"sizes": sizes}
