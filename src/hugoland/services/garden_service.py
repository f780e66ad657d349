"""Garden of Growth: a coin sink that grows a permanent coin bonus."""
from __future__ import annotations

from datetime import datetime, timedelta

from hugoland.domain import economy
from hugoland.domain.state import GameState
from hugoland.services.outcomes import ActionOutcome, failed, ok


class GardenService:
    def plant_seed(self, state: GameState, now: datetime) -> ActionOutcome:
        garden = state.garden_of_growth
        if garden.is_planted:
            return failed("already_planted", "The garden is already planted.")
        if not state.spend_coins(garden.seed_cost):
            return failed("insufficient_coins", f"A seed costs {garden.seed_cost} coins.")
        garden.is_planted = True
        garden.planted_at = now
        garden.last_watered = now
        garden.last_growth_tick = now
        garden.water_hours_remaining = economy.GARDEN_SEED_WATER_HOURS
        return ok("Seed planted.")

    def buy_water(self, state: GameState, hours: int, now: datetime) -> ActionOutcome:
        garden = state.garden_of_growth
        if not garden.is_planted:
            return failed("not_planted", "Plant a seed before buying water.")
        if hours <= 0:
            return failed("invalid_amount", "Water hours must be positive.")
        if not state.spend_coins(garden.water_cost):
            return failed("insufficient_coins", f"Water costs {garden.water_cost} coins.")
        garden.water_hours_remaining += hours
        garden.last_watered = now
        return ok(f"Added {hours} hours of water.", value=garden.water_hours_remaining)

    def grow(self, state: GameState, now: datetime) -> bool:
        """
        Apply growth for every whole hour since the last tick.

        Only watered hours grow the plant; the tick stamp still moves past
        dry hours so they are never counted later.
        """

        garden = state.garden_of_growth
        if not garden.is_planted or garden.last_growth_tick is None:
            return False
        elapsed_hours = int((now - garden.last_growth_tick).total_seconds() // 3600)
        if elapsed_hours <= 0:
            return False
        garden.last_growth_tick += timedelta(hours=elapsed_hours)
        watered_hours = min(elapsed_hours, garden.water_hours_remaining)
        if watered_hours <= 0:
            return False
        garden.water_hours_remaining -= watered_hours
        garden.growth_cm = min(
            garden.max_growth_cm,
            garden.growth_cm + watered_hours * economy.GARDEN_GROWTH_CM_PER_HOUR,
        )
        garden.total_growth_bonus = economy.garden_growth_bonus(garden.growth_cm)
        return True
