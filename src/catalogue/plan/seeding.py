"""Default plan catalogue, inserted when the catalogue is empty."""

from protean import handle
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.plan.plan import Plan

DEFAULT_PLANS = [
    {
        "name": "Silver Plan",
        "price": 1300,
        "description": "Perfect for beginners starting their fitness journey with balanced nutrition.",
        "features": ["10 meals per week", "Balanced macros", "Weekly planning", "Email support"],
        "image": "https://images.unsplash.com/photo-1512621776951-a57141f2eefd?w=400&h=250&fit=crop",
        "info_content": [
            "Start your wellness journey with carefully portioned meals that help maintain consistent energy "
            "levels throughout the day.",
            "Perfect balance of proteins and carbs designed for beginners looking to establish healthy eating habits.",
            "Enjoy nutritious meals without the hassle of meal prep, ideal for those new to fitness nutrition.",
        ],
        "badge_color": "silver",
    },
    {
        "name": "Gold Plan",
        "price": 1500,
        "description": "Ideal for dedicated fitness enthusiasts looking for optimal results.",
        "features": [
            "10 meals per week",
            "Custom macro targets",
            "Flexible meal swapping",
            "24/7 priority support",
            "Monthly check-ins",
        ],
        "image": "https://images.unsplash.com/photo-1467003909585-2f8a72700288?w=400&h=250&fit=crop",
        "info_content": [
            "Unlock your full potential with premium ingredients and personalized nutrition tracking for "
            "sustainable transformation.",
            "Advanced macro customization to support muscle building, fat loss, or performance enhancement goals.",
            "Get the flexibility to swap meals based on your preferences while maintaining optimal nutrition.",
        ],
        "is_popular": True,
        "badge_color": "gold",
    },
    {
        "name": "Platinum Plan",
        "price": 2000,
        "description": "The ultimate package for athletes seeking peak performance.",
        "features": [
            "10 meals + juices",
            "Personalized recipes",
            "1-on-1 nutritionist",
            "Workout meal timing",
            "Weekly analytics",
        ],
        "image": "https://images.unsplash.com/photo-1490645935967-10de6ba17061?w=400&h=250&fit=crop",
        "info_content": [
            "Experience elite-level nutrition with dedicated support, ensuring every meal accelerates your path "
            "to excellence.",
            "Personalized meal timing synced with your workout schedule for maximum performance and recovery.",
            "Work directly with certified nutritionists to fine-tune your diet for competition-level results.",
        ],
        "badge_color": "platinum",
    },
]


@catalogue.command(part_of="Plan")
class SeedDefaultPlans:
    """Insert the default plans unless the catalogue already has some."""


@catalogue.command_handler(part_of=Plan)
class SeedPlansHandler:
    @handle(SeedDefaultPlans)
    def seed_default_plans(self, command):
        repo = current_domain.repository_for(Plan)
        if not repo.is_empty():
            return 0

        for data in DEFAULT_PLANS:
            repo.add(Plan.create(**data))

        logger.info("plans_seeded", count=len(DEFAULT_PLANS))
        return len(DEFAULT_PLANS)
