"""Tests for lookup paths."""

from hippotrack.engine.lookup import TIMESTAMP_PATHS, first_present, get_path


class TestGetPath:
    """Test get_path()."""

    def test_nested(self) -> None:
        assert get_path({"a": {"b": {"c": 3}}}, ("a", "b", "c")) == 3

    def test_missing(self) -> None:
        assert get_path({"a": {}}, ("a", "b", "c")) is None

    def test_non_mapping_step(self) -> None:
        assert get_path({"a": [1]}, ("a", "b")) is None
        assert get_path(None, ("a",)) is None


class TestFirstPresent:
    """Test first_present()."""

    def test_first_match_wins(self) -> None:
        update = {"edited_message": {"date": 2}, "message": {"date": 1}}
        assert first_present(update, TIMESTAMP_PATHS) == 1

    def test_falls_through(self) -> None:
        update = {"callback_query": {"message": {"date": 7}}}
        assert first_present(update, TIMESTAMP_PATHS) == 7

    def test_zero_is_present(self) -> None:
        assert first_present({"message": {"date": 0}}, TIMESTAMP_PATHS) == 0

    def test_nothing_found(self) -> None:
        assert first_present({"inline_query": {"id": "1"}}, TIMESTAMP_PATHS) is None
