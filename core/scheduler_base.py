"""
Scheduler framework: process containers, event log, trace snapshots and statistics
"""

from collections import deque
from typing import Callable, Deque, Dict, Iterable, List, Optional
from dataclasses import dataclass, field
from enum import Enum
from .process import Process, ProcessState
from .resource import Resource

# Time slice (quantum) in ticks
TIME_SLICE = 2

# Cosmetic delay between ticks in slow mode (seconds)
PACING_DELAY = 0.5


class EventType(Enum):
    """Scheduler event type"""
    DISPATCH = "Dispatch"
    PREEMPTION = "Preemption"
    TIME_SLICE_EXPIRED = "Time Slice Expired"
    BLOCK = "Block"
    WAKEUP = "Wakeup"
    RESOURCE_OCCUPY = "Resource Occupy"
    RESOURCE_RELEASE = "Resource Release"
    FINISH = "Finish"


@dataclass
class Event:
    """Simulation event"""
    tick: int
    event_type: EventType
    pid: Optional[int] = None
    description: str = ""


@dataclass
class GanttEntry:
    """Gantt chart entry"""
    pid: int
    start_time: int
    end_time: int
    state: ProcessState


@dataclass
class TickSnapshot:
    """State of every container after one scheduler iteration"""
    tick: int
    running: Optional[int]
    ready: List[int]
    waiting: List[int]
    finished: List[int]
    resource_holder: Optional[int]
    processes: List[Dict] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'tick': self.tick,
            'running': self.running,
            'ready': list(self.ready),
            'waiting': list(self.waiting),
            'finished': list(self.finished),
            'resource_holder': self.resource_holder,
            'processes': [dict(p) for p in self.processes],
        }


class SchedulerStats:
    """Scheduling statistics"""

    def __init__(self):
        self.productive_ticks = 0
        self.iterations = 0
        self.dispatches = 0
        self.context_switches = 0
        self.preemptions = 0
        self.blocks = 0
        self.total_turnaround_time = 0
        self.total_waiting_time = 0
        self.process_count = 0

    def calculate_averages(self) -> Dict:
        """Averages over finished processes"""
        if self.process_count == 0:
            return {
                'avg_turnaround_time': 0,
                'avg_waiting_time': 0,
                'productive_ticks': self.productive_ticks,
                'iterations': self.iterations,
                'dispatches': self.dispatches,
                'context_switches': self.context_switches,
                'preemptions': self.preemptions,
                'blocks': self.blocks,
            }

        return {
            'avg_turnaround_time': self.total_turnaround_time / self.process_count,
            'avg_waiting_time': self.total_waiting_time / self.process_count,
            'productive_ticks': self.productive_ticks,
            'iterations': self.iterations,
            'dispatches': self.dispatches,
            'context_switches': self.context_switches,
            'preemptions': self.preemptions,
            'blocks': self.blocks,
        }


class BaseScheduler:
    """
    Base scheduler class
    Owns the running slot, the ready/waiting queues, the finished list and the
    shared resource. Subclasses implement the per-tick policy.
    """

    def __init__(self, processes: List[Process], name: str = "Base Scheduler",
                 verbose: bool = False):
        self.processes = list(processes)
        self.name = name
        self.verbose = verbose
        self.current_tick = 0

        self.running_process: Optional[Process] = None
        self.ready_queue: Deque[Process] = deque(self.processes)
        self.waiting_queue: Deque[Process] = deque()
        self.finished_processes: List[Process] = []
        self.resource = Resource()

        self.previous_process: Optional[Process] = None
        self.gantt_chart: List[GanttEntry] = []
        self.trace: List[TickSnapshot] = []
        self.stats = SchedulerStats()
        self.event_log: List[str] = []
        self.events: List[Event] = []

    def log_event(self, message: str, event_type: Optional[EventType] = None,
                  pid: Optional[int] = None):
        """Record an event log entry"""
        log_entry = f"[T={self.current_tick:3d}] {message}"
        self.event_log.append(log_entry)
        if event_type is not None:
            self.events.append(Event(self.current_tick, event_type, pid, message))
        if self.verbose:
            print(log_entry)

    def add_to_gantt_chart(self, pid: int, start: int, end: int, state: ProcessState):
        """Add a Gantt entry, extending the last one when it is contiguous"""
        if start >= end:
            return
        if self.gantt_chart:
            last = self.gantt_chart[-1]
            if last.pid == pid and last.state == state and last.end_time == start:
                last.end_time = end
                return
        self.gantt_chart.append(GanttEntry(pid, start, end, state))

    def all_processes(self) -> Iterable[Process]:
        """Every process across the four containers"""
        if self.running_process is not None:
            yield self.running_process
        yield from self.ready_queue
        yield from self.waiting_queue
        yield from self.finished_processes

    def get_current_snapshot(self) -> TickSnapshot:
        rows = sorted(self.all_processes(), key=lambda p: p.state.order)
        return TickSnapshot(
            tick=self.current_tick,
            running=self.running_process.pid if self.running_process else None,
            ready=[p.pid for p in self.ready_queue],
            waiting=[p.pid for p in self.waiting_queue],
            finished=[p.pid for p in self.finished_processes],
            resource_holder=self.resource.holder,
            processes=[p.to_dict() for p in rows],
        )

    def record_snapshot(self, on_tick: Optional[Callable[[TickSnapshot], None]] = None) -> TickSnapshot:
        snapshot = self.get_current_snapshot()
        self.trace.append(snapshot)
        if on_tick is not None:
            on_tick(snapshot)
        return snapshot

    def update_statistics(self):
        """Final statistics update"""
        self.stats.process_count = len(self.finished_processes)
        self.stats.total_turnaround_time = 0
        self.stats.total_waiting_time = 0

        for process in self.finished_processes:
            # every process is present from tick 0
            self.stats.total_turnaround_time += process.finish_tick
            self.stats.total_waiting_time += process.finish_tick - process.total_time

    def step(self) -> bool:
        """
        Run one iteration (implemented by subclasses)

        Returns:
            True once the simulation is complete
        """
        raise NotImplementedError("Subclasses must implement step()")

    def get_results(self) -> Dict:
        """
        Simulation results

        Returns:
            results dictionary (statistics, Gantt chart, trace, log, ...)
        """
        self.update_statistics()

        return {
            'algorithm': self.name,
            'ticks': self.current_tick,
            'statistics': self.stats.calculate_averages(),
            'gantt_chart': self.gantt_chart,
            'event_log': self.event_log,
            'processes': self.finished_processes,
            'trace': self.trace,
        }
