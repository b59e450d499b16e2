"""Pydantic request/response schemas for the Catalogue API."""

from datetime import datetime

from pydantic import Field

from shared.schemas import CamelModel


class CreatePlanRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    price: float = Field(ge=0)
    billing_period: str | None = None
    description: str | None = None
    features: list[str] | None = None
    image: str | None = None
    info_content: list[str] | None = None
    is_popular: bool | None = None
    badge_color: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Diamond Plan",
                    "price": 2600,
                    "features": ["14 meals per week", "Dedicated chef"],
                    "badgeColor": "platinum",
                }
            ]
        }
    }


class UpdatePlanRequest(CamelModel):
    """Partial update; only the keys present in the body are changed."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    price: float | None = Field(default=None, ge=0)
    billing_period: str | None = None
    description: str | None = None
    features: list[str] | None = None
    image: str | None = None
    info_content: list[str] | None = None
    is_popular: bool | None = None
    badge_color: str | None = None


class PlanSchema(CamelModel):
    id: str
    name: str
    price: float
    billing_period: str | None = None
    description: str | None = None
    features: list[str] = []
    image: str | None = None
    info_content: list[str] = []
    is_popular: bool = False
    badge_color: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_plan(cls, plan) -> "PlanSchema":
        return cls(
            id=str(plan.id),
            name=plan.name,
            price=plan.price,
            billing_period=plan.billing_period,
            description=plan.description,
            features=list(plan.features or []),
            image=plan.image,
            info_content=list(plan.info_content or []),
            is_popular=bool(plan.is_popular),
            badge_color=plan.badge_color,
            created_at=plan.created_at,
            updated_at=plan.updated_at,
        )
