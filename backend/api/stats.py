from fastapi import APIRouter, Query

from backend.services.stats_service import compute_stats

router = APIRouter(prefix="/api/stats")


@router.get("")
def get_stats(include_seed: bool = Query(True, description="Count generated seed rounds")):
    return compute_stats(include_seed=include_seed)
