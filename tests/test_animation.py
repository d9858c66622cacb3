import pytest

from Route_Sim.engine.animation import AnimationClock, ClockPhase, interpolate
from Route_Sim.engine.pathfinding import shortest_path
from Route_Sim.engine.schedulers import ManualScheduler
from Route_Sim.graph.model import GraphModel


@pytest.fixture
def two_hop_path():
    graph = GraphModel.from_dict(
        {
            "nodes": [
                {"id": "A", "x": 0.0, "y": 0.0},
                {"id": "B", "x": 100.0, "y": 0.0},
                {"id": "C", "x": 100.0, "y": 300.0},
            ],
            "edges": [
                {"from": "A", "to": "B", "cost": 1},
                {"from": "C", "to": "B", "cost": 1},
            ],
        }
    )
    path = shortest_path(graph, "A", "C")
    assert len(path) == 2
    return path


def make_clock(fake_time, duration=1000.0):
    scheduler = ManualScheduler()
    views, completions = [], []
    clock = AnimationClock(
        scheduler,
        duration=duration,
        time_source=fake_time,
        on_progress=views.append,
        on_complete=completions.append,
    )
    return clock, scheduler, views, completions


def test_interpolate_start_midpoint_and_end(two_hop_path):
    start = interpolate(two_hop_path, 0.0)
    assert (start.segment_index, start.fraction, start.x, start.y) == (0, 0.0, 0.0, 0.0)

    quarter = interpolate(two_hop_path, 0.25)
    assert quarter.segment_index == 0
    assert quarter.fraction == pytest.approx(0.5)
    assert (quarter.x, quarter.y) == pytest.approx((50.0, 0.0))

    middle = interpolate(two_hop_path, 0.5)
    assert (middle.segment_index, middle.fraction) == (1, 0.0)
    assert (middle.x, middle.y) == (100.0, 0.0)

    end = interpolate(two_hop_path, 1.0)
    assert (end.segment_index, end.fraction) == (1, 1.0)
    assert (end.x, end.y) == (100.0, 300.0)


def test_segments_get_equal_time_regardless_of_length(two_hop_path):
    view = interpolate(two_hop_path, 0.75)
    assert view.segment_index == 1
    assert view.y == pytest.approx(150.0)


def test_interpolate_clamps_and_rejects_empty(two_hop_path):
    assert interpolate(two_hop_path, -1.0).progress == 0.0
    assert interpolate(two_hop_path, 3.0).progress == 1.0
    with pytest.raises(ValueError):
        interpolate([], 0.5)


def test_clock_runs_to_completion_once(fake_time, two_hop_path):
    clock, scheduler, views, completions = make_clock(fake_time)
    assert clock.phase is ClockPhase.IDLE

    clock.begin(two_hop_path)
    assert clock.phase is ClockPhase.RUNNING

    scheduler.step()
    assert views[-1].segment_index == 0 and views[-1].fraction == 0.0

    fake_time.advance(500.0)
    scheduler.step()
    assert (views[-1].segment_index, views[-1].fraction) == (1, 0.0)
    assert clock.progress == 0.5

    fake_time.advance(700.0)
    scheduler.step()
    assert views[-1].progress == 1.0
    assert (views[-1].segment_index, views[-1].fraction) == (1, 1.0)
    assert clock.phase is ClockPhase.COMPLETED
    assert len(completions) == 1

    # nothing left to run
    assert len(scheduler) == 0
    scheduler.step()
    assert len(completions) == 1


def test_completion_at_exact_duration(fake_time, two_hop_path):
    clock, scheduler, _views, completions = make_clock(fake_time)
    clock.begin(two_hop_path)
    fake_time.advance(1000.0)
    scheduler.step()
    assert completions and clock.phase is ClockPhase.COMPLETED


def test_future_start_time_holds_packet_at_source(fake_time, two_hop_path):
    clock, scheduler, views, _ = make_clock(fake_time)
    clock.begin(two_hop_path, start_time=fake_time.now + 500.0)
    fake_time.advance(250.0)
    scheduler.step()
    assert views[-1].progress == 0.0
    fake_time.advance(750.0)
    scheduler.step()
    assert views[-1].progress == pytest.approx(0.5)


def test_cancel_returns_to_idle_without_completion(fake_time, two_hop_path):
    clock, scheduler, views, completions = make_clock(fake_time)
    clock.begin(two_hop_path)
    scheduler.step()
    clock.cancel()
    assert clock.phase is ClockPhase.IDLE
    fake_time.advance(5000.0)
    scheduler.step()
    assert len(views) == 1
    assert completions == []


def test_restart_supersedes_pending_frames(fake_time, two_hop_path):
    clock, scheduler, views, completions = make_clock(fake_time)
    clock.begin(two_hop_path)
    scheduler.step()
    fake_time.advance(900.0)
    clock.begin(two_hop_path[:1])
    assert len(scheduler) == 1
    scheduler.step()
    assert views[-1].progress == 0.0
    fake_time.advance(1000.0)
    scheduler.step()
    assert len(completions) == 1
    assert completions[0].segment_index == 0


class _NoCancelScheduler(ManualScheduler):
    """Scheduler whose cancel is a no-op, like a frame already queued."""

    def cancel(self, handle):
        pass


def test_stale_frames_are_ignored_without_scheduler_cancel(fake_time, two_hop_path):
    scheduler = _NoCancelScheduler()
    completions = []
    clock = AnimationClock(
        scheduler,
        duration=100.0,
        time_source=fake_time,
        on_complete=completions.append,
    )
    clock.begin(two_hop_path)
    clock.begin(two_hop_path)
    fake_time.advance(100.0)
    scheduler.step()
    assert len(completions) == 1


def test_begin_rejects_empty_path(fake_time):
    clock, *_ = make_clock(fake_time)
    with pytest.raises(ValueError):
        clock.begin([])
    assert clock.phase is ClockPhase.IDLE


def test_zero_duration_completes_on_first_frame(fake_time, two_hop_path):
    clock, scheduler, views, completions = make_clock(fake_time, duration=0.0)
    clock.begin(two_hop_path)
    scheduler.step()
    assert views[-1].progress == 1.0
    assert len(completions) == 1


def test_default_duration_from_config(fake_time):
    clock = AnimationClock(ManualScheduler(), time_source=fake_time)
    assert clock.duration == 2500.0


def test_zero_duration_still_waits_for_start_time(fake_time, two_hop_path):
    clock, scheduler, views, completions = make_clock(fake_time, duration=0.0)
    clock.begin(two_hop_path, start_time=fake_time.now + 300.0)
    scheduler.step()
    assert views[-1].progress == 0.0
    assert completions == []
    assert clock.phase is ClockPhase.RUNNING
    fake_time.advance(300.0)
    scheduler.step()
    assert views[-1].progress == 1.0
    assert len(completions) == 1
