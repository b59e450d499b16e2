"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from access.auth import require_admin
from catalogue.api.schemas import CreatePlanRequest, PlanSchema, UpdatePlanRequest
from catalogue.plan.management import CreatePlan, DeletePlan, UpdatePlan
from catalogue.plan.plan import Plan
from shared.schemas import MessageResponse

plan_router = APIRouter(prefix="/api/plans", tags=["plans"])


@plan_router.get("", response_model=list[PlanSchema])
async def list_plans() -> list[PlanSchema]:
    plans = current_domain.repository_for(Plan).by_price()
    return [PlanSchema.from_plan(plan) for plan in plans]


@plan_router.post("", status_code=201, response_model=PlanSchema, dependencies=[Depends(require_admin)])
async def create_plan(body: CreatePlanRequest) -> PlanSchema:
    command = CreatePlan(
        name=body.name,
        price=body.price,
        billing_period=body.billing_period,
        description=body.description,
        features=json.dumps(body.features) if body.features is not None else None,
        image=body.image,
        info_content=json.dumps(body.info_content) if body.info_content is not None else None,
        is_popular=body.is_popular,
        badge_color=body.badge_color,
    )
    plan = current_domain.process(command, asynchronous=False)
    return PlanSchema.from_plan(plan)


@plan_router.patch("/{plan_id}", response_model=PlanSchema, dependencies=[Depends(require_admin)])
async def update_plan(plan_id: str, body: UpdatePlanRequest) -> PlanSchema:
    command = UpdatePlan(
        plan_id=plan_id,
        changes=json.dumps(body.model_dump(exclude_unset=True)),
    )
    plan = current_domain.process(command, asynchronous=False)
    return PlanSchema.from_plan(plan)


@plan_router.delete("/{plan_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_plan(plan_id: str) -> MessageResponse:
    current_domain.process(DeletePlan(plan_id=plan_id), asynchronous=False)
    return MessageResponse(message="Plan deleted")
