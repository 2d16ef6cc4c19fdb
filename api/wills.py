"""
api.wills
=========

Endpoints for the will registry and its beneficiary ledger.

The caller is always taken from the ``X-Caller`` header, so owner‑side
operations (create, update, deactivate, beneficiaries) act on the
caller's own will; only execution names another owner in the path.
"""

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from testament.host import TxContext
from testament.registry import WillRegistry
from .deps import get_context, get_registry, unwrap

router = APIRouter(tags=["wills"])


class ExecutorRequest(BaseModel):
    """Body naming an executor account."""
    executor: str = Field(..., min_length=1)


class BeneficiaryRequest(BaseModel):
    """Body for inserting or updating a beneficiary entry."""
    share: int
    asset_type: str
    custom_data: Optional[str] = None


# ---------- POST /wills ----------
@router.post("/wills", status_code=201)
def create_will(
    data: ExecutorRequest,
    ctx: TxContext = Depends(get_context),
    reg: WillRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    return asdict(unwrap(reg.create_will(ctx, data.executor)))


# ---------- PUT /wills/executor ----------
@router.put("/wills/executor")
def update_executor(
    data: ExecutorRequest,
    ctx: TxContext = Depends(get_context),
    reg: WillRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    return asdict(unwrap(reg.update_executor(ctx, data.executor)))


# ---------- POST /wills/deactivate ----------
@router.post("/wills/deactivate")
def deactivate_will(
    ctx: TxContext = Depends(get_context),
    reg: WillRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    return asdict(unwrap(reg.deactivate_will(ctx)))


# ---------- POST /wills/{owner}/execute ----------
@router.post("/wills/{owner}/execute")
def execute_will(
    owner: str,
    ctx: TxContext = Depends(get_context),
    reg: WillRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    """Executor‑only, once the owner's check‑in deadline has passed."""
    return asdict(unwrap(reg.execute_will(ctx, owner)))


# ---------- PUT /wills/beneficiaries/{beneficiary} ----------
@router.put("/wills/beneficiaries/{beneficiary}")
def set_beneficiary(
    beneficiary: str,
    data: BeneficiaryRequest,
    ctx: TxContext = Depends(get_context),
    reg: WillRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    result = reg.set_beneficiary(ctx, beneficiary, data.share, data.asset_type, data.custom_data)
    return asdict(unwrap(result))


# ---------- DELETE /wills/beneficiaries/{beneficiary} ----------
@router.delete("/wills/beneficiaries/{beneficiary}")
def remove_beneficiary(
    beneficiary: str,
    ctx: TxContext = Depends(get_context),
    reg: WillRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    return asdict(unwrap(reg.remove_beneficiary(ctx, beneficiary)))


# ---------- GET /wills/{owner} ----------
@router.get("/wills/{owner}")
def get_will(owner: str, reg: WillRegistry = Depends(get_registry)) -> Dict[str, Any]:
    will = reg.get_will(owner)
    if will is None:
        raise HTTPException(status_code=404, detail="Will not found")
    return asdict(will)


# ---------- GET /wills/{owner}/active ----------
@router.get("/wills/{owner}/active")
def is_will_active(owner: str, reg: WillRegistry = Depends(get_registry)) -> Dict[str, Any]:
    return {"owner": owner, "active": reg.is_will_active(owner)}


# ---------- GET /wills/{owner}/beneficiaries ----------
@router.get("/wills/{owner}/beneficiaries")
def list_beneficiaries(owner: str, reg: WillRegistry = Depends(get_registry)) -> List[Dict[str, Any]]:
    return [asdict(e) for e in reg.list_beneficiaries(owner)]


# ---------- GET /wills/{owner}/beneficiaries/{beneficiary} ----------
@router.get("/wills/{owner}/beneficiaries/{beneficiary}")
def get_beneficiary(
    owner: str,
    beneficiary: str,
    reg: WillRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    entry = reg.get_beneficiary(owner, beneficiary)
    if entry is None:
        raise HTTPException(status_code=404, detail="Beneficiary not found")
    return asdict(entry)
