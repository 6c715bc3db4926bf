import pytest

from loadout_manager.errors import (
    DuplicateGroupNameError,
    DuplicateProfileNameError,
    InvalidNameError,
    LastProfileError,
    NoSuchProfileError,
)
from loadout_manager.models.mod_data import GroupRef, ModConfig, ModData, ModSpecification
from loadout_manager.services.migration import dump_mod_data
from loadout_manager.services.profile_service import (
    add_mods,
    create_group,
    create_profile,
    delete_group,
    delete_mod,
    delete_mod_in_group,
    delete_profile,
    duplicate_profile,
    move_mod_between_groups,
    move_mod_out_of_group,
    move_mod_to_group,
    rename_group,
    rename_profile,
    reorder_mod,
    reorder_mod_in_group,
    set_active_profile,
    set_group_enabled,
    set_group_priority_override,
    set_mod_enabled,
    set_mod_priority,
)
from loadout_manager.services.query import get_enabled_mods_with_priority

A = "https://mods.example/a"
B = "https://mods.example/b"
C = "https://mods.example/c"


def _root(data: ModData) -> list[str]:
    """Root rows as URLs, folder references as ``[name]``."""
    return [
        f"[{item.group_name}]" if isinstance(item, GroupRef) else item.spec.url
        for item in data.profiles["default"].mods
    ]


def _members(data: ModData, group: str) -> list[str]:
    return [mc.spec.url for mc in data.profiles["default"].groups[group].mods]


class TestCreateGroup:
    def test_appends_enabled_reference(self, mod_data):
        assert create_group(mod_data, "default", "extra") == "extra"
        assert _root(mod_data) == [A, "[core]", "[extra]"]
        assert mod_data.profiles["default"].mods[-1].enabled is True
        assert _members(mod_data, "extra") == []

    def test_name_is_trimmed(self, mod_data):
        assert create_group(mod_data, "default", "  spaced  ") == "spaced"
        assert "spaced" in mod_data.profiles["default"].groups

    def test_duplicate_raises(self, mod_data):
        with pytest.raises(DuplicateGroupNameError):
            create_group(mod_data, "default", "core")

    def test_blank_raises(self, mod_data):
        with pytest.raises(InvalidNameError):
            create_group(mod_data, "default", "   ")

    def test_name_of_dangling_reference_raises(self, mod_data):
        mod_data.profiles["default"].mods.append(GroupRef(group_name="gone", enabled=True))
        with pytest.raises(DuplicateGroupNameError):
            create_group(mod_data, "default", "gone")
        assert "gone" not in mod_data.profiles["default"].groups

    def test_unknown_profile_raises(self, mod_data):
        with pytest.raises(NoSuchProfileError):
            create_group(mod_data, "ghost", "x")


class TestRenameGroup:
    def test_updates_map_and_references(self, mod_data):
        assert rename_group(mod_data, "default", "core", "base") is True
        prof = mod_data.profiles["default"]
        assert list(prof.groups) == ["base"]
        assert _root(mod_data) == [A, "[base]"]
        assert _members(mod_data, "base") == [B, C]

    def test_round_trip_is_byte_identical(self, mod_data):
        create_group(mod_data, "default", "late")
        before = dump_mod_data(mod_data)
        rename_group(mod_data, "default", "core", "base")
        rename_group(mod_data, "default", "base", "core")
        assert dump_mod_data(mod_data) == before

    def test_rename_to_existing_raises(self, mod_data):
        create_group(mod_data, "default", "extra")
        with pytest.raises(DuplicateGroupNameError):
            rename_group(mod_data, "default", "core", "extra")
        assert list(mod_data.profiles["default"].groups) == ["core", "extra"]

    def test_rename_onto_dangling_reference_raises(self, mod_data):
        mod_data.profiles["default"].mods.append(GroupRef(group_name="gone", enabled=True))
        before = dump_mod_data(mod_data)
        with pytest.raises(DuplicateGroupNameError):
            rename_group(mod_data, "default", "core", "gone")
        assert dump_mod_data(mod_data) == before
        urls = [mc.spec.url for mc, _ in get_enabled_mods_with_priority(mod_data, "default")]
        assert urls == [A, B]

    def test_same_name_is_noop(self, mod_data):
        assert rename_group(mod_data, "default", "core", "core") is False

    def test_missing_folder_is_noop(self, mod_data):
        assert rename_group(mod_data, "default", "ghost", "new") is False
        assert "new" not in mod_data.profiles["default"].groups

    def test_blank_raises(self, mod_data):
        with pytest.raises(InvalidNameError):
            rename_group(mod_data, "default", "core", "")


class TestDeleteGroup:
    def test_members_move_to_end_of_root(self, mod_data, make_mod):
        mod_data.profiles["default"].mods.append(make_mod("https://mods.example/z"))
        assert delete_group(mod_data, "default", "core") is True
        assert _root(mod_data) == [A, "https://mods.example/z", B, C]
        assert mod_data.profiles["default"].groups == {}

    def test_member_settings_kept(self, mod_data):
        delete_group(mod_data, "default", "core")
        moved = mod_data.profiles["default"].mods[2]
        assert isinstance(moved, ModConfig)
        assert moved.enabled is False
        assert moved.priority == 9

    def test_missing_folder_is_noop(self, mod_data):
        assert delete_group(mod_data, "default", "ghost") is False
        assert _root(mod_data) == [A, "[core]"]

    def test_dangling_reference_removed(self, mod_data):
        mod_data.profiles["default"].mods.append(GroupRef(group_name="ghost", enabled=True))
        assert delete_group(mod_data, "default", "ghost") is True
        assert _root(mod_data) == [A, "[core]"]


class TestGroupSettings:
    def test_set_enabled(self, mod_data):
        assert set_group_enabled(mod_data, "default", "core", False) is True
        assert mod_data.profiles["default"].mods[1].enabled is False

    def test_set_enabled_missing(self, mod_data):
        assert set_group_enabled(mod_data, "default", "ghost", False) is False

    def test_set_and_clear_override(self, mod_data):
        assert set_group_priority_override(mod_data, "default", "core", 50) is True
        assert mod_data.profiles["default"].groups["core"].priority_override == 50
        assert set_group_priority_override(mod_data, "default", "core", None) is True
        assert mod_data.profiles["default"].groups["core"].priority_override is None

    def test_override_missing_folder(self, mod_data):
        assert set_group_priority_override(mod_data, "default", "ghost", 1) is False


class TestMoves:
    def test_move_to_group(self, mod_data):
        assert move_mod_to_group(mod_data, "default", 0, "core") is True
        assert _root(mod_data) == ["[core]"]
        assert _members(mod_data, "core") == [B, C, A]

    def test_move_reference_row_is_noop(self, mod_data):
        assert move_mod_to_group(mod_data, "default", 1, "core") is False
        assert _root(mod_data) == [A, "[core]"]

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_move_bad_index_is_noop(self, mod_data, index):
        assert move_mod_to_group(mod_data, "default", index, "core") is False
        assert _members(mod_data, "core") == [B, C]

    def test_move_to_missing_folder_is_noop(self, mod_data):
        assert move_mod_to_group(mod_data, "default", 0, "ghost") is False
        assert _root(mod_data) == [A, "[core]"]

    def test_move_out_of_group(self, mod_data):
        assert move_mod_out_of_group(mod_data, "default", "core", 0) is True
        assert _root(mod_data) == [A, "[core]", B]
        assert _members(mod_data, "core") == [C]

    def test_move_out_bad_index_is_noop(self, mod_data):
        assert move_mod_out_of_group(mod_data, "default", "core", 5) is False
        assert move_mod_out_of_group(mod_data, "default", "ghost", 0) is False

    def test_move_between_groups(self, mod_data):
        create_group(mod_data, "default", "extra")
        assert move_mod_between_groups(mod_data, "default", "core", 1, "extra") is True
        assert _members(mod_data, "core") == [B]
        assert _members(mod_data, "extra") == [C]

    def test_move_between_missing_target_keeps_source(self, mod_data):
        assert move_mod_between_groups(mod_data, "default", "core", 0, "ghost") is False
        assert _members(mod_data, "core") == [B, C]

    def test_every_mod_stays_in_exactly_one_place(self, mod_data):
        create_group(mod_data, "default", "extra")
        move_mod_to_group(mod_data, "default", 0, "extra")
        move_mod_between_groups(mod_data, "default", "core", 0, "extra")
        move_mod_out_of_group(mod_data, "default", "extra", 0)

        prof = mod_data.profiles["default"]
        urls = [item.spec.url for item in prof.mods if isinstance(item, ModConfig)]
        for group in prof.groups.values():
            urls.extend(mc.spec.url for mc in group.mods)
        assert sorted(urls) == [A, B, C]


class TestEntries:
    def test_add_skips_existing_specs(self, mod_data):
        specs = [ModSpecification(url=u) for u in (A, C, "https://mods.example/new")]
        assert add_mods(mod_data, "default", specs) == 1
        added = mod_data.profiles["default"].mods[-1]
        assert added.spec.url == "https://mods.example/new"
        assert added.required is False
        assert added.enabled is True

    def test_add_skips_repeats_in_same_batch(self):
        data = ModData()
        spec = ModSpecification(url="u")
        assert add_mods(data, "default", [spec, spec]) == 1

    def test_delete_root_mod(self, mod_data):
        assert delete_mod(mod_data, "default", 0) is True
        assert _root(mod_data) == ["[core]"]

    def test_delete_reference_row_is_noop(self, mod_data):
        assert delete_mod(mod_data, "default", 1) is False
        assert "core" in mod_data.profiles["default"].groups

    def test_delete_in_group(self, mod_data):
        assert delete_mod_in_group(mod_data, "default", "core", 1) is True
        assert _members(mod_data, "core") == [B]
        assert delete_mod_in_group(mod_data, "default", "core", 1) is False

    def test_set_enabled_root_and_member(self, mod_data):
        assert set_mod_enabled(mod_data, "default", 0, False) is True
        assert set_mod_enabled(mod_data, "default", 1, True, group_name="core") is True
        prof = mod_data.profiles["default"]
        assert prof.mods[0].enabled is False
        assert prof.groups["core"].mods[1].enabled is True

    def test_set_enabled_on_reference_row_is_noop(self, mod_data):
        assert set_mod_enabled(mod_data, "default", 1, False) is False

    def test_set_priority(self, mod_data):
        assert set_mod_priority(mod_data, "default", 0, -7) is True
        assert mod_data.profiles["default"].mods[0].priority == -7
        assert set_mod_priority(mod_data, "default", 3, 1, group_name="core") is False

    def test_reorder_root(self, mod_data):
        assert reorder_mod(mod_data, "default", 0, 1) is True
        assert _root(mod_data) == ["[core]", A]
        assert reorder_mod(mod_data, "default", 0, 5) is False

    def test_reorder_in_group(self, mod_data):
        assert reorder_mod_in_group(mod_data, "default", "core", 1, 0) is True
        assert _members(mod_data, "core") == [C, B]
        assert reorder_mod_in_group(mod_data, "default", "ghost", 0, 1) is False


class TestProfiles:
    def test_create(self, mod_data):
        assert create_profile(mod_data, " second ") == "second"
        assert mod_data.profiles["second"].mods == []

    def test_create_duplicate_raises(self, mod_data):
        with pytest.raises(DuplicateProfileNameError):
            create_profile(mod_data, "default")

    def test_duplicate_is_deep_copy(self, mod_data):
        duplicate_profile(mod_data, "default", "copy")
        copy = mod_data.profiles["copy"]
        assert copy == mod_data.profiles["default"]

        copy.groups["core"].mods[0].enabled = False
        copy.mods[1].enabled = False
        original = mod_data.profiles["default"]
        assert original.groups["core"].mods[0].enabled is True
        assert original.mods[1].enabled is True

    def test_duplicate_unknown_source_raises(self, mod_data):
        with pytest.raises(NoSuchProfileError):
            duplicate_profile(mod_data, "ghost", "copy")

    def test_rename_active_keeps_it_active_and_in_place(self, mod_data):
        create_profile(mod_data, "other")
        assert rename_profile(mod_data, "default", "main") == "main"
        assert list(mod_data.profiles) == ["main", "other"]
        assert mod_data.active_profile == "main"

    def test_rename_to_existing_raises(self, mod_data):
        create_profile(mod_data, "other")
        with pytest.raises(DuplicateProfileNameError):
            rename_profile(mod_data, "default", "other")

    def test_set_active(self, mod_data):
        create_profile(mod_data, "other")
        set_active_profile(mod_data, "other")
        assert mod_data.active_profile == "other"

    def test_set_active_unknown_raises(self, mod_data):
        with pytest.raises(NoSuchProfileError):
            set_active_profile(mod_data, "ghost")
        assert mod_data.active_profile == "default"

    def test_delete_last_raises(self, mod_data):
        with pytest.raises(LastProfileError):
            delete_profile(mod_data, "default")
        assert "default" in mod_data.profiles

    def test_delete_active_switches_to_first_by_name(self, mod_data):
        create_profile(mod_data, "zeta")
        create_profile(mod_data, "beta")
        delete_profile(mod_data, "default")
        assert mod_data.active_profile == "beta"

    def test_delete_inactive_keeps_active(self, mod_data):
        create_profile(mod_data, "other")
        delete_profile(mod_data, "other")
        assert mod_data.active_profile == "default"
        assert list(mod_data.profiles) == ["default"]
