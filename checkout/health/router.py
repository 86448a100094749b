from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from checkout.health.service import health_stripe_info
from checkout.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/stripe")
def health_stripe(request: Request):
    return JSONResponse(health_stripe_info(request.app))

@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return JSONResponse(rate_limit_health_info(request))
