"""Unit tests for id generation."""

from diario import ids


class TestNewId:
    """Test new_id."""

    def test_clock_derived(self, monkeypatch):
        """Test ids are milliseconds since the epoch."""
        monkeypatch.setattr(ids, "_last_id", 0)
        monkeypatch.setattr(ids.time, "time_ns", lambda: 1_700_000_000_123_456_789)
        assert ids.new_id() == "1700000000123"

    def test_same_millisecond(self, monkeypatch):
        """Test calls within one millisecond still get distinct ids."""
        monkeypatch.setattr(ids, "_last_id", 0)
        monkeypatch.setattr(ids.time, "time_ns", lambda: 5_000_000)
        assert [ids.new_id() for _ in range(3)] == ["5", "6", "7"]

    def test_clock_going_backwards(self, monkeypatch):
        """Test ids keep increasing when the clock steps back."""
        monkeypatch.setattr(ids, "_last_id", 100)
        monkeypatch.setattr(ids.time, "time_ns", lambda: 50_000_000)
        assert ids.new_id() == "101"

    def test_increasing(self):
        """Test consecutive ids are strictly increasing."""
        generated = [int(ids.new_id()) for _ in range(100)]
        assert generated == sorted(set(generated))
