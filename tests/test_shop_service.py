from __future__ import annotations

from datetime import timedelta

from hugoland.core.rng import RNG
from hugoland.domain.state import GameState
from hugoland.services.shop_service import ShopService, roll_rarity
from tests.helpers.fakes import T0, ScriptedRNG, StubContentFactory, make_relic


def _make_service(rng: RNG | None = None, factory: StubContentFactory | None = None) -> ShopService:
    return ShopService(factory or StubContentFactory(), rng or RNG(4), market_refresh=timedelta(minutes=5))


def test_roll_rarity_walks_cumulative_weights() -> None:
    weights = (50, 30, 15, 4, 1)

    assert roll_rarity(weights, ScriptedRNG([0.10])) == "common"
    assert roll_rarity(weights, ScriptedRNG([0.60])) == "rare"
    assert roll_rarity(weights, ScriptedRNG([0.90])) == "epic"
    assert roll_rarity(weights, ScriptedRNG([0.999])) == "mythical"


def test_open_chest_grants_item_and_bonus_gems() -> None:
    service = _make_service(rng=ScriptedRNG([0.2, 0.1]))
    state = GameState(coins=1000)

    outcome = service.open_chest(state, 500)

    reward = outcome.value
    assert outcome.success is True
    assert reward.kind == "weapon"
    assert reward.item.is_chest is True
    assert state.inventory.weapons == [reward.item]
    assert state.coins == 500
    assert 5 <= reward.bonus_gems <= 14
    assert state.gems == 50 + reward.bonus_gems
    assert state.statistics.chests_opened == 1
    assert state.collection_book.total_weapons_found == 1
    assert state.collection_book.rarity_stats["common"] == 1


def test_open_chest_needs_coins() -> None:
    service = _make_service()
    state = GameState(coins=50)

    outcome = service.open_chest(state, 100)

    assert outcome.reason == "insufficient_coins"
    assert state.inventory.weapons == []
    assert state.inventory.armor == []


def test_infinite_coins_cheat_makes_chests_free() -> None:
    service = _make_service()
    state = GameState(coins=0)
    state.cheats.infinite_coins = True

    assert service.open_chest(state, 2500).success is True
    assert state.coins == 0


def test_purchase_mythical_grants_mythical_equipment() -> None:
    service = _make_service(rng=ScriptedRNG([0.9]))
    state = GameState(coins=60000)

    reward = service.purchase_mythical(state, 50000).value

    assert reward.kind == "armor"
    assert reward.item.rarity == "mythical"
    assert reward.item.is_chest is False
    assert state.coins == 10000


def test_purchase_relic_spends_gems_and_equips() -> None:
    service = _make_service()
    state = GameState(gems=100)
    state.yojef_market.items = [make_relic("r1"), make_relic("r2", stat="defense")]

    outcome = service.purchase_relic(state, "r1")

    assert outcome.success is True
    assert state.gems == 40
    assert [relic.id for relic in state.yojef_market.items] == ["r2"]
    assert state.inventory.equipped_relic_ids == ["r1"]
    assert state.player_stats.attack == 60
    assert service.purchase_relic(state, "r1").reason == "not_found"
    assert service.purchase_relic(state, "r2").reason == "insufficient_gems"


def test_refresh_market_restocks_and_moves_window() -> None:
    service = _make_service()
    state = GameState()

    service.refresh_market(state, T0)

    market = state.yojef_market
    assert 3 <= len(market.items) <= 5
    assert market.last_refresh == T0
    assert market.next_refresh == T0 + timedelta(minutes=5)


def test_mine_gem_can_find_shiny_gems() -> None:
    service = _make_service(rng=ScriptedRNG([0.01, 0.5]))
    state = GameState()

    shiny = service.mine_gem(state).value
    plain = service.mine_gem(state).value

    assert (shiny.gems, shiny.shiny_gems) == (0, 1)
    assert (plain.gems, plain.shiny_gems) == (1, 0)
    assert (state.gems, state.shiny_gems) == (51, 1)
    assert state.mining.total_shiny_gems_mined == 1
    assert state.mining.total_gems_mined == 1


def test_exchange_shiny_gems() -> None:
    service = _make_service()
    state = GameState(gems=0, shiny_gems=3)

    assert service.exchange_shiny_gems(state, 4).reason == "insufficient_shiny_gems"
    assert service.exchange_shiny_gems(state, 0).reason == "invalid_amount"
    assert service.exchange_shiny_gems(state, 2).value == 20
    assert (state.gems, state.shiny_gems) == (20, 1)


def test_debug_grants_never_go_negative() -> None:
    service = _make_service()
    state = GameState()

    service.grant_debug_coins(state, -10_000)
    service.grant_debug_gems(state, 25)

    assert (state.coins, state.gems) == (0, 75)
