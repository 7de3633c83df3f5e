import logging

from fastapi import APIRouter, FastAPI, HTTPException

from app.config import get_settings
from app.lifespan import build_application_lifespan
from ..core.compare import build_input, compare_regimes
from ..core.errors import InvalidInput, UnknownRegimeError
from ..core.models import CalculationInput, ComparisonResult
from ..core.regimes import SUPPORTED_REGIMES, describe_regime, get_regime, list_regimes

logger = logging.getLogger("salary_app")


async def _announce_regimes(_: FastAPI) -> None:
    settings = get_settings()
    logger.info(
        "Salary compare API ready; regimes=%s version=%s sha=%s",
        ",".join(SUPPORTED_REGIMES),
        settings.build_version,
        settings.build_sha,
    )


app = FastAPI(
    title="Salary Regime Compare",
    description="Net salary under the current (2025) and projected (2026) INSS/IRRF rules.",
    lifespan=build_application_lifespan("api", startup_hook=_announce_regimes),
)
router = APIRouter()


@router.get("/health")
def health():
    settings = getattr(app.state, "settings", get_settings())
    return {
        "status": "ok",
        "regimes": list(SUPPORTED_REGIMES),
        "build": {
            "version": settings.build_version,
            "sha": settings.build_sha,
        },
    }


@router.post("/compare", response_model=ComparisonResult)
def compare(req: CalculationInput):
    try:
        in_ = build_input(**req.model_dump())
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=exc.issues) from exc
    return compare_regimes(in_)


@router.get("/compare", response_model=ComparisonResult)
def compare_query(gross: float, dependents: int = 0, other: float = 0.0, liable: bool = True):
    try:
        in_ = build_input(
            gross_salary=gross,
            dependents=dependents,
            other_deductions=other,
            is_contribution_liable=liable,
        )
    except InvalidInput as exc:
        logger.info("Rejected comparison request: %s", exc)
        raise HTTPException(status_code=400, detail=exc.issues) from exc
    return compare_regimes(in_)


@router.get("/regimes")
def regimes():
    return [describe_regime(regime) for regime in list_regimes()]


@router.get("/regimes/{name}")
def regime_detail(name: str):
    try:
        regime = get_regime(name)
    except UnknownRegimeError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown regime {name}") from exc
    return describe_regime(regime)


app.include_router(router)
