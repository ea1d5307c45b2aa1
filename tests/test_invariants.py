from collections import Counter

import pytest

from core.process import ProcessState, MAX_PRIORITY, MIN_PRIORITY
from core.scheduler_base import EventType
from schedulers.aging_round_robin import AgingRoundRobinScheduler
from utils.input_parser import InputParser


SEEDS = list(range(12))


def run_random(seed, num_processes=6):
    processes = InputParser.generate_random_processes(num_processes=num_processes, seed=seed)
    scheduler = AgingRoundRobinScheduler(processes)
    return processes, scheduler, scheduler.run_all()


@pytest.mark.parametrize('seed', SEEDS)
def test_partition_invariant(seed):
    processes, scheduler, result = run_random(seed)
    expected = Counter(p.pid for p in processes)

    for snapshot in result['trace']:
        pids = list(snapshot.ready) + list(snapshot.waiting) + list(snapshot.finished)
        if snapshot.running is not None:
            pids.append(snapshot.running)
        assert Counter(pids) == expected

        states = Counter(row['state'] for row in snapshot.processes)
        assert states[ProcessState.RUNNING.value] <= 1


@pytest.mark.parametrize('seed', SEEDS)
def test_monotonic_completion(seed):
    processes, scheduler, result = run_random(seed)
    last_running_time = {p.pid: 0 for p in processes}

    for snapshot in result['trace']:
        for row in snapshot.processes:
            assert row['running_time'] >= last_running_time[row['pid']]
            assert row['running_time'] <= row['total_time']
            last_running_time[row['pid']] = row['running_time']

    finishes = Counter(e.pid for e in scheduler.events if e.event_type == EventType.FINISH)
    assert finishes == Counter(p.pid for p in processes)
    assert all(p.state == ProcessState.FINISHED for p in processes)
    assert all(p.running_time == p.total_time for p in processes)
    assert result['ticks'] == sum(p.total_time for p in processes)


@pytest.mark.parametrize('seed', SEEDS)
def test_exclusive_resource(seed):
    processes, scheduler, result = run_random(seed)

    holder = None
    for event in scheduler.events:
        if event.event_type == EventType.RESOURCE_OCCUPY:
            assert holder is None
            holder = event.pid
        elif event.event_type == EventType.RESOURCE_RELEASE:
            assert holder == event.pid
            holder = None
    assert holder is None

    for snapshot in result['trace']:
        assert snapshot.resource_holder not in snapshot.finished
        assert snapshot.resource_holder not in snapshot.waiting


@pytest.mark.parametrize('seed', SEEDS)
def test_wakeups_follow_waiting_order(seed):
    processes, scheduler, result = run_random(seed)

    waiting = []
    for event in scheduler.events:
        if event.event_type == EventType.BLOCK:
            waiting.append(event.pid)
        elif event.event_type == EventType.WAKEUP:
            assert waiting and waiting.pop(0) == event.pid
    assert waiting == []


@pytest.mark.parametrize('seed', SEEDS)
def test_priority_bounds(seed):
    processes, scheduler, result = run_random(seed)
    for snapshot in result['trace']:
        for row in snapshot.processes:
            assert MIN_PRIORITY <= row['priority'] <= MAX_PRIORITY


@pytest.mark.parametrize('seed', SEEDS)
def test_quantum_enforcement(seed):
    processes, scheduler, result = run_random(seed)
    for snapshot in result['trace']:
        for row in snapshot.processes:
            if row['state'] == ProcessState.RUNNING.value:
                assert row['running_time_in_slice'] < scheduler.time_slice
            assert row['running_time_in_slice'] <= row['running_time']


def test_priorities_stay_in_bounds_on_long_runs():
    processes = InputParser.generate_random_processes(num_processes=3, seed=7)
    for p in processes:
        p.total_time = 60
        p.resource_request_time = 60
    result = AgingRoundRobinScheduler(processes).run_all()
    priorities = [row['priority'] for s in result['trace'] for row in s.processes]
    assert min(priorities) >= MIN_PRIORITY
    assert max(priorities) <= MAX_PRIORITY
