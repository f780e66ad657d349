"""Daily login rewards, offline accrual and the fragment merchant."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from hugoland.core.rng import RNG
from hugoland.domain import economy
from hugoland.domain.state import DailyReward, GameState, MerchantReward
from hugoland.services.factories import make_instance_id
from hugoland.services.outcomes import ActionOutcome, failed, ok

logger = logging.getLogger(__name__)

OFFLINE_ACCRUAL_THRESHOLD = timedelta(minutes=5)
MERCHANT_COIN_RANGE = (1000, 2999)
MERCHANT_GEM_RANGE = (50, 149)


def _utc_date(moment: datetime):
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).date()


class RewardsService:
    """Handles the rewards that are granted outside of combat."""

    def __init__(self, rng: RNG) -> None:
        self._rng = rng

    # -----------------------
    # Daily Rewards
    # -----------------------
    def refresh_daily_reward(self, state: GameState, now: datetime) -> bool:
        """Offer today's reward if none is pending and none was claimed today."""
        daily = state.daily_rewards
        if daily.available_reward is not None:
            return False
        last = daily.last_claim_date
        if last is not None:
            gap = (_utc_date(now) - _utc_date(last)).days
            if gap < 1:
                return False
            if gap > 1:
                daily.current_streak = 0
        day = min(daily.current_streak + 1, economy.DAILY_REWARD_MAX_DAY)
        coins, gems = economy.daily_reward(day)
        daily.available_reward = DailyReward(day=day, coins=coins, gems=gems)
        return True

    def claim_daily_reward(self, state: GameState, now: datetime) -> ActionOutcome:
        daily = state.daily_rewards
        reward = daily.available_reward
        if reward is None:
            return failed("no_reward", "No daily reward is available.")
        state.coins += reward.coins
        state.gems += reward.gems
        reward.claimed = True
        reward.claim_date = now
        daily.reward_history.append(reward)
        daily.available_reward = None
        daily.last_claim_date = now
        daily.current_streak += 1
        daily.max_streak = max(daily.max_streak, daily.current_streak)
        return ok(f"Day {reward.day} reward claimed.", value=reward)

    # -----------------------
    # Offline Progress
    # -----------------------
    def accrue_offline(self, state: GameState, now: datetime) -> bool:
        """Bank rewards for a long enough absence, capped at max_offline_hours in total."""
        offline = state.offline_progress
        last = offline.last_save_time
        offline.last_save_time = now
        if last is None or now - last < OFFLINE_ACCRUAL_THRESHOLD:
            return False
        remaining_hours = offline.max_offline_hours - offline.offline_time / 3600
        hours = min((now - last).total_seconds() / 3600, remaining_hours)
        if hours <= 0:
            return False
        coins, gems = economy.offline_rewards(state.zone, hours)
        offline.offline_coins += coins
        offline.offline_gems += gems
        offline.offline_time += int(hours * 3600)
        logger.info("Accrued %.2f offline hours: %d coins, %d gems", hours, coins, gems)
        return True

    def claim_offline_rewards(self, state: GameState) -> ActionOutcome:
        offline = state.offline_progress
        if offline.offline_coins == 0 and offline.offline_gems == 0:
            return failed("nothing_to_claim", "No offline rewards are waiting.")
        coins, gems = offline.offline_coins, offline.offline_gems
        state.coins += coins
        state.gems += gems
        offline.offline_coins = 0
        offline.offline_gems = 0
        offline.offline_time = 0
        return ok(f"Claimed {coins} coins and {gems} gems.", value=(coins, gems))

    # -----------------------
    # Merchant
    # -----------------------
    def spend_fragments(self, state: GameState) -> ActionOutcome:
        merchant = state.merchant
        if merchant.show_reward_modal:
            return failed("reward_pending", "Pick the pending merchant reward first.")
        if merchant.hugoland_fragments < economy.FRAGMENTS_PER_REDEMPTION:
            return failed(
                "insufficient_fragments",
                f"{economy.FRAGMENTS_PER_REDEMPTION} Hugoland Fragments are required.",
            )
        merchant.hugoland_fragments -= economy.FRAGMENTS_PER_REDEMPTION
        merchant.available_rewards = [
            self._roll_merchant_reward() for _ in range(economy.MERCHANT_REWARD_CHOICES)
        ]
        merchant.show_reward_modal = True
        return ok(value=list(merchant.available_rewards))

    def select_merchant_reward(self, state: GameState, reward_id: str) -> ActionOutcome:
        merchant = state.merchant
        if not merchant.show_reward_modal:
            return failed("no_reward_pending", "No merchant reward is waiting.")
        reward = next((entry for entry in merchant.available_rewards if entry.id == reward_id), None)
        if reward is None:
            return failed("not_found", f"Reward '{reward_id}' was not offered.")
        state.coins += reward.coins
        state.gems += reward.gems
        merchant.show_reward_modal = False
        merchant.available_rewards = []
        return ok(reward.description, value=reward)

    def _roll_merchant_reward(self) -> MerchantReward:
        reward_id = make_instance_id("reward", self._rng)
        if self._rng.random() < 0.5:
            coins = self._rng.randint(*MERCHANT_COIN_RANGE)
            return MerchantReward(
                id=reward_id,
                type="coins",
                name="Coin Reward",
                description=f"A pile of {coins} coins",
                coins=coins,
            )
        gems = self._rng.randint(*MERCHANT_GEM_RANGE)
        return MerchantReward(
            id=reward_id,
            type="gems",
            name="Gem Reward",
            description=f"A pouch of {gems} gems",
            gems=gems,
        )
