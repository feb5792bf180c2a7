"""Tests for group_by."""

import copy as _copy
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import nestmap.core as core
import nestmap.errors as errors
import nestmap.types as types
import nestmap.zipper as zipper

STIAN = {"name": "stian", "group": 1, "cat": 2}
PER = {"name": "per", "group": 1, "cat": 1}


class TestGroupBy:
    """Records fold into a nested tree keyed by the group fields."""

    def test_documented_example(self) -> None:
        result = core.group_by([STIAN, PER], ["group", "cat"])

        assert result == {1: {1: [PER], 2: [STIAN]}}

    def test_newest_first_by_default(self, people: list[dict[str, _typing.Any]]) -> None:
        result = core.group_by(people, ["group", "cat"])

        assert [r["name"] for r in result[1][2]] == ["ola", "stian"]
        assert [r["name"] for r in result[1][1]] == ["per"]
        assert [r["name"] for r in result[2][1]] == ["kari"]

    def test_insertion_order(self, people: list[dict[str, _typing.Any]]) -> None:
        result = core.group_by(people, ["group", "cat"], order="insertion")

        assert [r["name"] for r in result[1][2]] == ["stian", "ola"]
        assert [r["name"] for r in result[2][1]] == ["kari"]

    def test_ignores_group_order_setting(
        self,
        people: list[dict[str, _typing.Any]],
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("NESTMAP_GROUP_ORDER", "insertion")

        result = core.group_by(people, ["group"])

        assert [r["name"] for r in result[1]] == ["ola", "per", "stian"]

    def test_ignores_config_files(
        self,
        people: list[dict[str, _typing.Any]],
        tmp_path: _pathlib.Path,
    ) -> None:
        (tmp_path / "nestmap.yaml").write_text("group_order: [unterminated\n")

        result = core.group_by(people, ["group"])

        assert [r["name"] for r in result[1]] == ["ola", "per", "stian"]

    def test_matches_accumulating_fold(self, people: list[dict[str, _typing.Any]]) -> None:
        expected: dict[_typing.Any, _typing.Any] = {}
        for record in people:
            expected = core.deep_put(
                expected, [record["group"], record["cat"]], record, types.Mode.ACCUMULATE
            )

        assert core.group_by(people, ["group", "cat"]) == expected

    def test_builds_tree_without_copying(
        self,
        people: list[dict[str, _typing.Any]],
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        """The private accumulator is filled in place, never rebuilt per record."""

        def fail(*args: _typing.Any) -> None:
            raise AssertionError("group_by rebuilt its tree")

        monkeypatch.setattr(zipper, "rebuild", fail)

        result = core.group_by(people, ["group", "cat"])

        assert [r["name"] for r in result[1][2]] == ["ola", "stian"]

    def test_many_groups(self) -> None:
        records = [{"g": i, "h": i % 7} for i in range(20000)]

        result = core.group_by(records, ["h", "g"])

        assert len(result) == 7
        assert sum(len(groups) for groups in result.values()) == 20000
        assert result[3][10] == [records[10]]

    def test_large_single_group(self) -> None:
        records = [{"g": 0, "n": i} for i in range(20000)]

        result = core.group_by(records, ["g"])

        assert result[0][0] is records[-1]
        assert result[0][-1] is records[0]

    def test_single_field(self, people: list[dict[str, _typing.Any]]) -> None:
        result = core.group_by(people, ["cat"])

        assert set(result) == {1, 2}
        assert [r["name"] for r in result[1]] == ["kari", "per"]

    def test_records_are_shared(self) -> None:
        """Leaves hold the input records themselves, not copies."""
        result = core.group_by([STIAN], ["group"])

        assert result[1][0] is STIAN

    def test_records_not_mutated(self, people: list[dict[str, _typing.Any]]) -> None:
        saved = _copy.deepcopy(people)

        core.group_by(people, ["group", "cat"])

        assert people == saved

    def test_empty_records(self) -> None:
        assert core.group_by([], ["group"]) == {}

    def test_accepts_generator(self) -> None:
        result = core.group_by((r for r in [STIAN, PER]), ["cat"])

        assert result == {2: [STIAN], 1: [PER]}

    def test_none_is_a_group_value(self) -> None:
        record = {"name": "x", "group": None}

        assert core.group_by([record], ["group"]) == {None: [record]}

    def test_missing_field(self) -> None:
        with _pytest.raises(errors.MissingGroupFieldError) as exc_info:
            core.group_by([STIAN, {"name": "nobody", "group": 1}], ["group", "cat"])

        assert exc_info.value.field == "cat"
        assert exc_info.value.index == 1
        assert str(exc_info.value) == "Record 1 has no group field 'cat'"

    def test_missing_field_is_key_error(self) -> None:
        with _pytest.raises(KeyError):
            core.group_by([{"name": "x"}], ["group"])

    def test_empty_fields(self) -> None:
        with _pytest.raises(errors.InvalidPathError):
            core.group_by([STIAN], [])

    def test_string_fields(self) -> None:
        with _pytest.raises(errors.InvalidPathError):
            core.group_by([STIAN], "group")

    def test_non_mapping_record(self) -> None:
        with _pytest.raises(TypeError, match="must be a mapping"):
            core.group_by([("group", 1)], ["group"])

    def test_unknown_order(self) -> None:
        with _pytest.raises(ValueError, match="Unknown group order"):
            core.group_by([STIAN], ["group"], order="oldest")
