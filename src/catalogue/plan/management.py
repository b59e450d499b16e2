"""Plan management — commands and handlers."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.plan.plan import Plan


@catalogue.command(part_of="Plan")
class CreatePlan:
    name: String(required=True, max_length=100)
    price: Float(required=True)
    billing_period: String(max_length=30)
    description: Text()
    features: Text()  # JSON: list of strings
    image: String(max_length=500)
    info_content: Text()  # JSON: list of strings
    is_popular: Boolean()
    badge_color: String(max_length=30)


@catalogue.command(part_of="Plan")
class UpdatePlan:
    plan_id: Identifier(required=True)
    changes: Text(required=True)  # JSON: only the fields being changed


@catalogue.command(part_of="Plan")
class DeletePlan:
    plan_id: Identifier(required=True)


def _plan_or_404(repo, plan_id):
    plan = repo.find(plan_id)
    if plan is None:
        raise ObjectNotFoundError("Plan not found")
    return plan


def _assert_name_available(repo, name, plan_id=None):
    existing = repo.find_by_name(name)
    if existing is not None and str(existing.id) != str(plan_id):
        raise ValidationError({"name": [f"A plan named '{name}' already exists"]})


@catalogue.command_handler(part_of=Plan)
class ManagePlanHandler:
    @handle(CreatePlan)
    def create_plan(self, command):
        repo = current_domain.repository_for(Plan)
        _assert_name_available(repo, command.name)

        plan = Plan.create(
            name=command.name,
            price=command.price,
            billing_period=command.billing_period,
            description=command.description,
            features=json.loads(command.features) if command.features else None,
            image=command.image,
            info_content=json.loads(command.info_content) if command.info_content else None,
            is_popular=command.is_popular,
            badge_color=command.badge_color,
        )
        repo.add(plan)
        logger.info("plan_created", plan_id=str(plan.id), name=plan.name, price=plan.price)
        return plan

    @handle(UpdatePlan)
    def update_plan(self, command):
        repo = current_domain.repository_for(Plan)
        plan = _plan_or_404(repo, command.plan_id)

        changes = json.loads(command.changes)
        if changes.get("name"):
            _assert_name_available(repo, changes["name"], plan_id=plan.id)

        plan.update(**changes)
        repo.add(plan)
        logger.info("plan_updated", plan_id=str(plan.id), fields=sorted(changes))
        return plan

    @handle(DeletePlan)
    def delete_plan(self, command):
        repo = current_domain.repository_for(Plan)
        plan = _plan_or_404(repo, command.plan_id)
        repo.discard(plan)
        logger.info("plan_deleted", plan_id=str(plan.id), name=plan.name)
