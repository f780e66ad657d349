from __future__ import annotations

from hugoland.domain.entities import Armor, Weapon
from hugoland.domain.inventory import check_removable
from hugoland.domain.state import GameState
from hugoland.services.inventory_service import InventoryService
from tests.helpers.fakes import make_relic


def _make_state() -> GameState:
    state = GameState(gems=500)
    state.inventory.weapons = [
        Weapon(id="w1", name="Sword", rarity="common", base_attack=15, upgrade_cost=100),
        Weapon(id="w2", name="Axe", rarity="rare", base_attack=30, upgrade_cost=100),
    ]
    state.inventory.armor = [Armor(id="a1", name="Vest", rarity="common", base_defense=6)]
    return state


def test_equip_weapon_swaps_stat_contribution() -> None:
    service = InventoryService()
    state = _make_state()

    service.equip(state, "weapon", "w1")
    assert state.player_stats.attack == 35
    service.equip(state, "weapon", "w2")

    assert state.player_stats.attack == 50
    assert state.inventory.current_weapon_id == "w2"


def test_equip_armor_and_relic() -> None:
    service = InventoryService()
    state = _make_state()
    state.inventory.relics.append(make_relic("r1", stat="defense"))

    service.equip(state, "armor", "a1")
    service.equip(state, "relic", "r1")

    assert state.player_stats.defense == 10 + 6 + 30
    assert state.inventory.equipped_relic_ids == ["r1"]


def test_equip_rejects_unknown_and_duplicate() -> None:
    service = InventoryService()
    state = _make_state()
    service.equip(state, "weapon", "w1")

    assert service.equip(state, "weapon", "nope").reason == "not_found"
    assert service.equip(state, "weapon", "w1").reason == "already_equipped"
    assert state.player_stats.attack == 35


def test_upgrading_equipped_weapon_raises_attack() -> None:
    service = InventoryService()
    state = _make_state()
    service.equip(state, "weapon", "w2")

    service.upgrade(state, "weapon", "w2")
    service.upgrade(state, "weapon", "w2")

    weapon = state.inventory.find_weapon("w2")
    assert weapon is not None
    assert (weapon.level, weapon.base_attack, weapon.upgrade_cost) == (3, 50, 225)
    assert state.gems == 500 - 100 - 150
    assert state.player_stats.attack == 70
    assert state.statistics.items_upgraded == 2


def test_upgrading_unequipped_item_leaves_stats_alone() -> None:
    service = InventoryService()
    state = _make_state()

    service.upgrade(state, "armor", "a1")

    armor = state.inventory.find_armor("a1")
    assert armor is not None
    assert armor.base_defense == 11
    assert state.player_stats.defense == 10


def test_upgrade_requires_gems() -> None:
    service = InventoryService()
    state = _make_state()
    state.gems = 99

    outcome = service.upgrade(state, "weapon", "w1")

    assert outcome.reason == "insufficient_gems"
    assert state.inventory.weapons[0].level == 1
    assert state.gems == 99


def test_relic_upgrade_uses_relic_increment() -> None:
    service = InventoryService()
    state = _make_state()
    state.inventory.relics.append(make_relic("r1"))
    service.equip(state, "relic", "r1")

    service.upgrade(state, "relic", "r1")

    relic = state.inventory.find_relic("r1")
    assert relic is not None
    assert (relic.base_attack, relic.upgrade_cost) == (62, 45)
    assert state.player_stats.attack == 20 + 62


def test_bulk_upgrade_is_all_or_nothing() -> None:
    service = InventoryService()
    state = _make_state()
    state.gems = 150

    outcome = service.bulk_upgrade(state, "weapon", ["w1", "w2"])

    assert outcome.reason == "insufficient_gems"
    assert [weapon.level for weapon in state.inventory.weapons] == [1, 1]
    assert state.gems == 150

    state.gems = 200
    outcome = service.bulk_upgrade(state, "weapon", ["w1", "w2", "w1"])

    assert outcome.success is True
    assert outcome.value == 200
    assert [weapon.level for weapon in state.inventory.weapons] == [2, 2]
    assert state.gems == 0


def test_equipped_items_cannot_be_sold_or_discarded() -> None:
    service = InventoryService()
    state = _make_state()
    service.equip(state, "weapon", "w1")

    assert check_removable(state.inventory, "weapon", "w1") == "equipped"
    assert service.sell(state, "weapon", "w1").reason == "equipped"
    assert service.discard(state, "weapon", "w1").reason == "equipped"
    assert state.inventory.current_weapon is not None


def test_sell_unequipped_weapon_pays_sell_price() -> None:
    service = InventoryService()
    state = _make_state()

    outcome = service.sell(state, "weapon", "w2")

    assert outcome.success is True
    assert state.coins == 525
    assert [weapon.id for weapon in state.inventory.weapons] == ["w1"]
    assert state.statistics.items_sold == 1


def test_sell_relic_refunds_half_its_gem_cost() -> None:
    service = InventoryService()
    state = _make_state()
    state.inventory.relics.append(make_relic("r1", cost=90))

    service.sell(state, "relic", "r1")

    assert state.gems == 545
    assert state.inventory.relics == []


def test_bulk_sell_skips_equipped_items() -> None:
    service = InventoryService()
    state = _make_state()
    service.equip(state, "weapon", "w2")

    outcome = service.bulk_sell(state, "weapon", ["w1", "w2", "missing"])

    assert outcome.value == 1
    assert [weapon.id for weapon in state.inventory.weapons] == ["w2"]
    assert state.coins == 525


def test_unequip_relic_removes_its_bonus() -> None:
    service = InventoryService()
    state = _make_state()
    state.inventory.relics.append(make_relic("r1"))
    service.equip(state, "relic", "r1")

    outcome = service.unequip_relic(state, "r1")

    assert outcome.success is True
    assert state.player_stats.attack == 20
    assert service.unequip_relic(state, "r1").reason == "not_equipped"
    assert service.discard(state, "relic", "r1").success is True
