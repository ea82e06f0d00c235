from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException

from ..security import verify_api_key
from ..schemas.fit import AnalyzeRequest, AnalyzeResponse, FitRequest, FitResponse
from ..services.archetypes import describe_table, dimensions_for
from ..services.calculator import analyze_fit, calculate_fit, normalize_record
from ..services.garment_sources import resolve_garment_measurements
from ..services.profile_store import ProfileStore, get_profile_store
from .deps import mock_rng, resolve_unit, user_measurements_or_profile


router = APIRouter(prefix="/fit", tags=["fit"], dependencies=[Depends(verify_api_key)])


@router.post("", response_model=FitResponse)
async def calculate(req: FitRequest, store: ProfileStore = Depends(get_profile_store)) -> Dict[str, Any]:
    """Label-count fit: per-dimension Perfect/Regular/Tight/Loose/Short/Long, tight wins ties."""
    # Stored profiles are already canonical inches
    user_unit = resolve_unit(req.unit) if req.user_measurements else "inch"
    user = user_measurements_or_profile(req.user_measurements, store)

    result = calculate_fit(
        user,
        req.garment_measurements,
        req.garment_type,
        unit=user_unit,
        current_size=req.current_size,
        garment_unit=req.garment_unit or resolve_unit(req.unit),
    )
    if req.save_result:
        store.save_last_result(result)
    return result


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(req: AnalyzeRequest, store: ProfileStore = Depends(get_profile_store)) -> Dict[str, Any]:
    """Averaged-magnitude fit: mean absolute difference banded into perfect/good/loose/tight."""
    dimensions_for(req.garment_type)
    user_unit = resolve_unit(req.unit) if req.user_measurements else "inch"
    user = user_measurements_or_profile(req.user_measurements, store)

    if req.garment_measurements:
        garment = normalize_record(req.garment_measurements, req.garment_unit or resolve_unit(req.unit))
    else:
        if not req.size_label:
            raise HTTPException(status_code=400, detail="Provide garment_measurements or a size_label to look up")
        garment = resolve_garment_measurements(req.source, req.size_label, req.garment_type, rng=mock_rng())

    result = analyze_fit(user, garment, req.garment_type, unit=user_unit, garment_unit="inch")
    result["garment_measurements"] = garment
    if req.save_result:
        store.save_last_result(result)
    return result


@router.get("/archetypes")
async def archetypes() -> Dict[str, Any]:
    return {"archetypes": describe_table()}


@router.get("/last")
async def last_result(store: ProfileStore = Depends(get_profile_store)) -> Dict[str, Any]:
    saved = store.last_result()
    if not saved:
        raise HTTPException(status_code=404, detail="No saved fit result")
    return saved
