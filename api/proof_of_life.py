"""
api.proof_of_life
=================

Check‑in endpoint and proof‑of‑life status lookup.
"""

from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from testament.host import TxContext
from testament.proof_of_life import execution_deadline
from testament.registry import WillRegistry
from .deps import get_context, get_registry, unwrap

router = APIRouter(tags=["proof-of-life"])


class CheckInRequest(BaseModel):
    """Optional period; the configured default applies when omitted."""
    period: Optional[int] = None


@router.post("/check-ins")
def check_in(
    data: Optional[CheckInRequest] = None,
    ctx: TxContext = Depends(get_context),
    reg: WillRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    period = data.period if data is not None else None
    return asdict(unwrap(reg.check_in(ctx, period)))


@router.get("/proof-of-life/{owner}")
def get_proof_of_life_status(owner: str, reg: WillRegistry = Depends(get_registry)) -> Dict[str, Any]:
    proof = reg.get_proof_of_life_status(owner)
    if proof is None:
        raise HTTPException(status_code=404, detail="No check-in recorded")
    return {**asdict(proof), "deadline": execution_deadline(proof)}
