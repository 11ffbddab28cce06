"""Tests for the null pruner."""

from hippotrack.engine.pruner import prune, prune_record
from hippotrack.types import ABSENT


class TestPrune:
    """Test prune()."""

    def test_scalars_pass_through(self) -> None:
        assert prune(0) == 0
        assert prune(False) is False
        assert prune("") == ""
        assert prune("x") == "x"

    def test_absent_values(self) -> None:
        assert prune(None) is ABSENT
        assert prune(ABSENT) is ABSENT
        assert prune([]) is ABSENT
        assert prune({}) is ABSENT

    def test_drops_null_keys(self) -> None:
        assert prune({"a": 1, "b": None}) == {"a": 1}

    def test_collapses_empty_branches(self) -> None:
        data = {"a": {"b": {"c": None}, "d": []}, "e": 1}
        assert prune(data) == {"e": 1}

    def test_lists_drop_absent_elements(self) -> None:
        assert prune([None, 1, {}, [None], 2]) == [1, 2]

    def test_all_absent_list_collapses(self) -> None:
        assert prune({"a": [None, {}, []]}) is ABSENT

    def test_tuple_normalized(self) -> None:
        assert prune((1, None)) == [1]

    def test_idempotent(self) -> None:
        data = {"a": [None, {"b": None, "c": 2}], "d": {}, "e": "x"}
        once = prune(data)
        assert prune(once) == once


class TestPruneRecord:
    """Test prune_record()."""

    def test_empty_record(self) -> None:
        assert prune_record({"a": None}) == {}

    def test_keeps_values(self) -> None:
        assert prune_record({"a": 1, "b": {"c": None}}) == {"a": 1}
