from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from gsync.dependencies import get_sync_planner
from gsync.schemas import SyncPlan
from gsync.services import SyncPlanner

router = APIRouter(tags=["gsync"])


class PlanRequest(BaseModel):
    specifiers: List[str] = Field(default_factory=list)


@router.post("/plan", response_model=SyncPlan)
async def build_plan(
    request: PlanRequest, planner: SyncPlanner = Depends(get_sync_planner)
):
    """Build the sync plan for the given commit specifiers.

    An empty list plans the uncommitted changes of the working tree.
    """
    return await planner.build_plan_async(request.specifiers)
