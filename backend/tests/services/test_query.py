import pytest

from loadout_manager.errors import NoSuchProfileError
from loadout_manager.models.mod_data import GroupRef, ModGroup
from loadout_manager.services.query import (
    any_mod,
    build_mod_string,
    count_mods,
    for_each_enabled_mod,
    for_each_mod,
    for_each_mod_mut,
    get_enabled_mods_with_priority,
    get_install_order,
    iter_mods,
)

A = "https://mods.example/a"
B = "https://mods.example/b"
C = "https://mods.example/c"


def _urls(mods) -> list[str]:
    return [mc.spec.url for mc in mods]


def _visit(fn, data, profile="default") -> list[str]:
    seen: list[str] = []
    fn(data, profile, lambda mc: seen.append(mc.spec.url))
    return seen


class TestTraversal:
    def test_visits_root_and_folder_members_in_order(self, mod_data):
        assert _visit(for_each_mod, mod_data) == [A, B, C]

    def test_enabled_only_skips_disabled_members(self, mod_data):
        assert _visit(for_each_enabled_mod, mod_data) == [A, B]

    def test_disabled_folder_skips_all_members(self, mod_data):
        mod_data.profiles["default"].mods[1].enabled = False
        assert _visit(for_each_enabled_mod, mod_data) == [A]
        assert _visit(for_each_mod, mod_data) == [A, B, C]

    def test_folder_toggle_keeps_member_flags(self, mod_data):
        ref = mod_data.profiles["default"].mods[1]
        ref.enabled = False
        ref.enabled = True
        assert _visit(for_each_enabled_mod, mod_data) == [A, B]

    def test_dangling_reference_is_skipped(self, mod_data):
        mod_data.profiles["default"].mods.append(GroupRef(group_name="ghost", enabled=True))
        assert _visit(for_each_mod, mod_data) == [A, B, C]

    def test_orphan_folder_is_unreachable(self, mod_data, make_mod):
        mod_data.profiles["default"].groups["orphan"] = ModGroup(mods=[make_mod("x")])
        assert "x" not in _visit(for_each_mod, mod_data)

    def test_mutating_visit_edits_in_place(self, mod_data):
        def bump(mc):
            mc.priority += 10

        for_each_mod_mut(mod_data, "default", bump)
        prof = mod_data.profiles["default"]
        assert prof.mods[0].priority == 15
        assert [mc.priority for mc in prof.groups["core"].mods] == [11, 19]

    def test_filters(self, mod_data):
        mods = iter_mods(mod_data, "default", mod_filter=lambda mc: mc.priority > 2)
        assert _urls(mods) == [A, C]

    def test_unknown_profile_raises(self, mod_data):
        with pytest.raises(NoSuchProfileError):
            list(iter_mods(mod_data, "ghost"))


class TestEffectivePriority:
    def test_own_priority_without_override(self, mod_data):
        result = get_enabled_mods_with_priority(mod_data, "default")
        assert [(mc.spec.url, prio) for mc, prio in result] == [(A, 5), (B, 1)]

    def test_override_applies_to_folder_members_only(self, mod_data):
        mod_data.profiles["default"].groups["core"].priority_override = 100
        result = get_enabled_mods_with_priority(mod_data, "default")
        assert [(mc.spec.url, prio) for mc, prio in result] == [(A, 5), (B, 100)]

    def test_stored_priority_untouched_by_override(self, mod_data):
        mod_data.profiles["default"].groups["core"].priority_override = 100
        get_enabled_mods_with_priority(mod_data, "default")
        assert mod_data.profiles["default"].groups["core"].mods[0].priority == 1

    def test_disabled_folder_contributes_nothing(self, mod_data):
        mod_data.profiles["default"].mods[1].enabled = False
        result = get_enabled_mods_with_priority(mod_data, "default")
        assert _urls(mc for mc, _ in result) == [A]

    def test_install_order_highest_first(self, mod_data):
        mod_data.profiles["default"].groups["core"].priority_override = 100
        assert _urls(mc for mc, _ in get_install_order(mod_data, "default")) == [B, A]

    def test_install_order_is_stable_on_ties(self, mod_data, make_mod):
        mod_data.profiles["default"].mods.append(make_mod("https://mods.example/d", priority=5))
        ordered = get_install_order(mod_data, "default")
        assert _urls(mc for mc, _ in ordered) == [A, "https://mods.example/d", B]


class TestAnyMod:
    def test_group_flag_passed_to_predicate(self, mod_data):
        calls: list[tuple[str, bool | None]] = []

        def record(mc, group_enabled):
            calls.append((mc.spec.url, group_enabled))
            return False

        assert any_mod(mod_data, "default", record) is False
        assert calls == [(A, None), (B, True), (C, True)]

    def test_short_circuits(self, mod_data):
        calls: list[str] = []

        def match_a(mc, _group_enabled):
            calls.append(mc.spec.url)
            return mc.spec.url == A

        assert any_mod(mod_data, "default", match_a) is True
        assert calls == [A]

    def test_finds_member_of_disabled_folder(self, mod_data):
        mod_data.profiles["default"].mods[1].enabled = False
        assert any_mod(mod_data, "default", lambda mc, g: mc.spec.url == C and g is False)


class TestCounts:
    def test_breakdown(self, mod_data):
        counts = count_mods(mod_data, "default")
        assert counts.total == 3
        assert counts.enabled == 2
        assert counts.disabled_in_enabled_groups == 1
        assert counts.disabled_root == 0
        assert counts.in_disabled_groups == 0

    @pytest.mark.parametrize("group_enabled", [True, False])
    def test_every_mod_counted_once(self, mod_data, make_mod, group_enabled):
        prof = mod_data.profiles["default"]
        prof.mods[1].enabled = group_enabled
        prof.mods.append(make_mod("https://mods.example/off", enabled=False))

        counts = count_mods(mod_data, "default")
        enabled_visits = _visit(for_each_enabled_mod, mod_data)
        assert counts.total == len(_visit(for_each_mod, mod_data))
        assert counts.enabled == len(enabled_visits)
        assert counts.total == (
            counts.enabled
            + counts.disabled_root
            + counts.disabled_in_enabled_groups
            + counts.in_disabled_groups
        )


class TestModString:
    def test_lists_enabled_urls(self, mod_data):
        mods = list(iter_mods(mod_data, "default"))
        assert build_mod_string(mods) == f"{A}\n{B}\n"

    def test_empty(self):
        assert build_mod_string([]) == ""
