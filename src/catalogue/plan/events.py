"""Domain events for the Plan aggregate."""

from protean.fields import Float, Identifier, String, Text

from catalogue.domain import catalogue


@catalogue.event(part_of="Plan")
class PlanCreated:
    """A meal plan was added to the catalogue."""

    __version__ = "v1"

    plan_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)


@catalogue.event(part_of="Plan")
class PlanUpdated:
    """A plan's details were changed."""

    __version__ = "v1"

    plan_id: Identifier(required=True)
    changed_fields: Text()  # JSON: list of field names
