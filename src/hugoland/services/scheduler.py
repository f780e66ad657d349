"""Timed subsystem checks run on every poll tick."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from hugoland.domain.state import GameState
from hugoland.services.garden_service import GardenService
from hugoland.services.rewards_service import RewardsService
from hugoland.services.shop_service import ShopService
from hugoland.services.skills_service import SkillsService

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Runs the independent time-driven checks against a state.

    Every check compares ``now`` with a timestamp stored in the state and
    moves that timestamp forward when it fires, so running twice inside the
    same interval changes nothing the second time. Poll cadence only affects
    how soon a due check is noticed.
    """

    def __init__(
        self,
        *,
        shop: ShopService,
        skills: SkillsService,
        garden: GardenService,
        rewards: RewardsService,
    ) -> None:
        self._shop = shop
        self._skills = skills
        self._garden = garden
        self._rewards = rewards

    def run_due(self, state: GameState, now: datetime) -> List[str]:
        """Run every due check and return the names of those that fired."""
        fired: List[str] = []
        market = state.yojef_market
        if market.next_refresh is None or now >= market.next_refresh or not market.items:
            self._shop.refresh_market(state, now)
            fired.append("market")
        if self._skills.expire(state, now):
            fired.append("menu_skill")
        if self._garden.grow(state, now):
            fired.append("garden")
        if self._rewards.accrue_offline(state, now):
            fired.append("offline")
        if self._rewards.refresh_daily_reward(state, now):
            fired.append("daily")
        if fired:
            logger.debug("Scheduled checks fired: %s", ", ".join(fired))
        return fired
