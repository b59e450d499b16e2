"""Plan aggregate — the meal plans offered on the storefront."""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, List, String, Text

from catalogue.domain import catalogue

UPDATABLE_FIELDS = (
    "name",
    "price",
    "billing_period",
    "description",
    "features",
    "image",
    "info_content",
    "is_popular",
    "badge_color",
)


def _now():
    return datetime.now(UTC)


@catalogue.aggregate
class Plan:
    """A subscription meal plan with its weekly price and marketing copy.

    Orders copy the plan name and price at checkout, so editing or deleting a
    plan never changes existing orders. Plan names are unique across the
    catalogue; the management handlers enforce this before saving.
    """

    name: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    billing_period: String(max_length=30, default="/week")
    description: Text()
    features: List(content_type=String)
    image: String(max_length=500)
    info_content: List(content_type=String)  # Rotating text snippets on the plan card
    is_popular: Boolean(default=False)
    badge_color: String(max_length=30, default="silver")
    created_at: DateTime(default=_now)
    updated_at: DateTime(default=_now)

    @classmethod
    def create(cls, name, price, **details):
        from catalogue.plan.events import PlanCreated

        now = _now()
        plan = cls(
            name=name,
            price=price,
            created_at=now,
            updated_at=now,
            **{key: value for key, value in details.items() if value is not None},
        )
        plan.raise_(PlanCreated(plan_id=plan.id, name=plan.name, price=plan.price))
        return plan

    def update(self, **changes):
        """Apply a partial update. Unknown keys are rejected."""
        from catalogue.plan.events import PlanUpdated

        unknown = sorted(set(changes) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError({"plan": [f"Unknown plan fields: {', '.join(unknown)}"]})

        for field, value in changes.items():
            setattr(self, field, value)
        self.updated_at = _now()

        self.raise_(PlanUpdated(plan_id=self.id, changed_fields=json.dumps(sorted(changes))))
