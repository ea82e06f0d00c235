from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException

from ..security import verify_api_key
from ..schemas.profile import ProfileIn, ProfileOut
from ..services.calculator import normalize_record
from ..services.profile_store import ProfileStore, get_profile_store
from .deps import resolve_unit


router = APIRouter(prefix="/profile", tags=["profile"], dependencies=[Depends(verify_api_key)])

_META_KEYS = ("gender", "timestamp")


def _split(profile: Dict[str, Any]) -> Dict[str, Any]:
    measurements = {k: v for k, v in profile.items() if k not in _META_KEYS}
    return {"measurements": measurements, "gender": profile.get("gender"), "timestamp": profile.get("timestamp")}


@router.get("", response_model=ProfileOut)
async def get_profile(store: ProfileStore = Depends(get_profile_store)) -> Dict[str, Any]:
    profile = store.load_profile()
    if not profile:
        raise HTTPException(status_code=404, detail="No saved profile")
    return _split(profile)


@router.put("", response_model=ProfileOut)
async def put_profile(req: ProfileIn, store: ProfileStore = Depends(get_profile_store)) -> Dict[str, Any]:
    # Stored canonical and in inches so later fit calls need no unit
    measurements = {k: v for k, v in normalize_record(req.measurements, resolve_unit(req.unit)).items() if v > 0}
    if not measurements:
        raise HTTPException(status_code=400, detail="measurements must contain at least one positive numeric value")
    return _split(store.save_profile(measurements, req.gender))


@router.delete("")
async def delete_profile(store: ProfileStore = Depends(get_profile_store)) -> Dict[str, str]:
    store.clear_profile()
    return {"status": "deleted"}
