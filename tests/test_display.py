"""Tests for the queue display aggregator."""

from datetime import datetime, timedelta, timezone

import pytest

from app.services.display_service import (
    BASELINE_TOP_ENTRIES,
    build_queue_snapshot,
    compute_total_size,
    mask_email,
    simulated_growth,
    top_entries,
)
from app.storage import MemoryStorage
from core.config import config

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class TestMaskEmail:
    """Tests for email masking."""

    @pytest.mark.parametrize(
        "email,expected",
        [
            ("ab@x.com", "a***@x.com"),
            ("abc@x.com", "a***@x.com"),
            ("abcd@x.com", "ab***@x.com"),
            ("alexander@x.com", "al***@x.com"),
        ],
    )
    def test_mask_email(self, email, expected):
        assert mask_email(email) == expected

    def test_domain_is_kept_unchanged(self):
        assert mask_email("someone@Mail.Example.co.uk") == "so***@Mail.Example.co.uk"


class TestSimulatedGrowth:
    """Tests for display-only queue growth."""

    def test_no_growth_outside_horizon(self):
        assert simulated_growth(3601, 3600, 25) == 0

    def test_growth_at_horizon_edge(self):
        assert simulated_growth(3600, 3600, 25) == 0

    def test_one_person_per_interval(self):
        assert simulated_growth(3600 - 25, 3600, 25) == 1
        assert simulated_growth(3600 - 49, 3600, 25) == 1
        assert simulated_growth(1800, 3600, 25) == 72

    def test_past_drop_counts_as_zero_seconds(self):
        assert simulated_growth(-500, 3600, 25) == simulated_growth(0, 3600, 25) == 144


class TestComputeTotalSize:
    """Tests for the reported queue size."""

    def test_no_real_entries_reports_baseline(self):
        assert compute_total_size(0) == config.QUEUE_BASELINE_OFFSET

    def test_adds_real_entries_without_drop(self):
        assert compute_total_size(5) == config.QUEUE_BASELINE_OFFSET + 5

    def test_capped_at_max_simulated_size_without_drop(self):
        assert compute_total_size(10) == config.MAX_SIMULATED_QUEUE_SIZE
        assert compute_total_size(17) == config.MAX_SIMULATED_QUEUE_SIZE
        assert compute_total_size(500) == config.MAX_SIMULATED_QUEUE_SIZE

    def test_scheduling_a_drop_never_shrinks_total(self):
        drop_time = NOW + timedelta(hours=3)
        for real_count in range(0, 20):
            assert compute_total_size(real_count, drop_time, NOW) >= compute_total_size(
                real_count
            )

    def test_drop_far_away_caps_at_max_simulated_size(self):
        drop_time = NOW + timedelta(hours=3)
        assert compute_total_size(2, drop_time, NOW) == 285
        assert compute_total_size(15, drop_time, NOW) == config.MAX_SIMULATED_QUEUE_SIZE

    def test_drop_within_horizon_grows(self):
        drop_time = NOW + timedelta(seconds=3600 - 100)
        # 4 intervals of 25 seconds elapsed inside the horizon
        assert compute_total_size(0, drop_time, NOW) == config.QUEUE_BASELINE_OFFSET + 4

    def test_naive_drop_time_is_treated_as_utc(self):
        drop_time = (NOW + timedelta(seconds=3600 - 100)).replace(tzinfo=None)
        assert compute_total_size(0, drop_time, NOW) == config.QUEUE_BASELINE_OFFSET + 4

    def test_monotonic_and_bounded_as_drop_approaches(self):
        drop_time = NOW + timedelta(hours=2)
        previous = 0
        for seconds in range(0, 3 * 3600, 60):
            size = compute_total_size(3, drop_time, NOW + timedelta(seconds=seconds))
            assert size >= previous
            assert size <= config.MAX_SIMULATED_QUEUE_SIZE
            previous = size
        assert previous == config.MAX_SIMULATED_QUEUE_SIZE

    def test_custom_settings(self):
        settings = config.model_copy(
            update={"QUEUE_BASELINE_OFFSET": 10, "QUEUE_HARD_CAPACITY": 12}
        )
        assert compute_total_size(1, settings=settings) == 11
        assert compute_total_size(5, settings=settings) == 12


class TestTopEntries:
    """Tests for the blended leaderboard."""

    async def test_real_entries_are_masked_and_sorted(self, memory_storage):
        await memory_storage.create_entry(email="alexander@x.com", position=3)
        entries = await memory_storage.list_entries()

        result = top_entries(entries, NOW, limit=5)

        assert [e.position for e in result] == [1, 2, 3, 3, 4]
        assert "al***@x.com" in [e.email for e in result]
        assert all("alexander" not in e.email for e in result)

    def test_bounded_prefix(self):
        result = top_entries([], NOW, limit=config.TOP_ENTRIES_LIMIT)
        assert len(result) == config.TOP_ENTRIES_LIMIT
        assert result[0].email == BASELINE_TOP_ENTRIES[0][1]

    def test_baseline_join_times_are_back_dated(self):
        result = top_entries([], NOW, limit=1)
        assert result[0].joined_at == NOW - timedelta(minutes=120)


class TestBuildQueueSnapshot:
    """Tests for the stats snapshot."""

    async def test_snapshot_without_drop(self, memory_storage: MemoryStorage):
        await memory_storage.create_entry(email="a@x.com", position=284)

        snapshot = await build_queue_snapshot(memory_storage, now=NOW)

        assert snapshot.total_size == 284
        assert snapshot.active_drop is None
        assert len(snapshot.top_entries) == config.TOP_ENTRIES_LIMIT

    async def test_full_queue_without_drop_stays_under_simulated_cap(
        self, memory_storage: MemoryStorage
    ):
        for i in range(17):
            await memory_storage.create_entry(email=f"user{i}@x.com", position=284 + i)

        snapshot = await build_queue_snapshot(memory_storage, now=NOW)

        assert snapshot.total_size == config.MAX_SIMULATED_QUEUE_SIZE

    async def test_snapshot_never_changes_stored_positions(
        self, memory_storage: MemoryStorage
    ):
        entry = await memory_storage.create_entry(email="a@x.com", position=284)
        await memory_storage.create_drop(
            name="Soon", drop_time=NOW + timedelta(minutes=10)
        )

        snapshot = await build_queue_snapshot(memory_storage, now=NOW)

        assert snapshot.total_size == config.MAX_SIMULATED_QUEUE_SIZE
        assert snapshot.active_drop.name == "Soon"
        assert (await memory_storage.get_entry(entry.id)).position == 284
