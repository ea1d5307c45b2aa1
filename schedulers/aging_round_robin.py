"""
Round Robin scheduler with dynamic priority aging, preemption and a single
exclusive resource
"""

import time
from typing import Callable, Deque, Dict, Iterable, List, Optional
from core.process import Process, ProcessState, MAX_PRIORITY, MIN_PRIORITY
from core.scheduler_base import (BaseScheduler, EventType,
                                 TickSnapshot, TIME_SLICE, PACING_DELAY)


def age_priorities(running: Optional[Process], ready: Iterable[Process]):
    """
    Apply one tick of aging
    The running process loses precedence (+1, capped at MAX_PRIORITY) and every
    ready process gains precedence (-1, floored at MIN_PRIORITY).
    """
    if running is not None:
        running.priority = min(running.priority + 1, MAX_PRIORITY)
    for process in ready:
        process.priority = max(process.priority - 1, MIN_PRIORITY)


def move_highest_priority_to_front(queue: Deque[Process]):
    """Move the first entry with the lowest priority value to the front (stable among equals)"""
    if not queue:
        return
    best_index = 0
    for index, process in enumerate(queue):
        if process.priority < queue[best_index].priority:
            best_index = index
    if best_index:
        process = queue[best_index]
        del queue[best_index]
        queue.appendleft(process)


class AgingRoundRobinScheduler(BaseScheduler):
    """
    Round Robin scheduler with priority aging
    Each tick: resource handshake, one tick of work for the running process,
    then aging, reordering, preemption and dispatch.
    """

    def __init__(self, processes: List[Process], time_slice: int = TIME_SLICE,
                 verbose: bool = False):
        not_ready = [p.pid for p in processes if p.state != ProcessState.READY]
        if not_ready:
            raise ValueError(f"All processes must be in the Ready state at the beginning "
                             f"(not ready: {not_ready})")

        seen = set()
        duplicates = []
        for p in processes:
            if p.pid in seen:
                duplicates.append(p.pid)
            seen.add(p.pid)
        if duplicates:
            raise ValueError(f"Duplicate PIDs: {duplicates}")

        # the finish check is an exact match, so the budget must still be ahead
        exhausted = [p.pid for p in processes
                     if p.total_time <= 0 or p.running_time >= p.total_time]
        if exhausted:
            raise ValueError(f"total_time must be positive and greater than running_time "
                             f"(PIDs: {exhausted})")

        if time_slice <= 0:
            raise ValueError(f"Time slice must be positive: {time_slice}")

        super().__init__(processes, f"Aging Round Robin (q={time_slice})", verbose)
        self.time_slice = time_slice
        self.last_tick_executed = 0

    # ----- container transitions -----

    def wakeup_waiting(self):
        """Wake the head of the waiting queue into the back of the ready queue"""
        if self.waiting_queue:
            process = self.waiting_queue.popleft()
            process.state = ProcessState.READY
            self.ready_queue.append(process)
            self.log_event(f"PID: {process.pid} is woken up to the ready state",
                           EventType.WAKEUP, process.pid)

    def release_resource(self):
        running = self.running_process
        if running is not None and self.resource.release(running.pid):
            self.log_event(f"Resource released by PID: {running.pid}",
                           EventType.RESOURCE_RELEASE, running.pid)
            self.wakeup_waiting()

    def finish_running(self):
        self.release_resource()
        process = self.running_process
        if process is not None:
            self.running_process = None
            process.state = ProcessState.FINISHED
            process.finish_tick = self.current_tick
            self.finished_processes.append(process)
            self.log_event(f"PID: {process.pid} has finished", EventType.FINISH, process.pid)

    def block_running(self):
        process = self.running_process
        if process is not None:
            self.running_process = None
            process.state = ProcessState.WAITING
            self.waiting_queue.append(process)
            self.stats.blocks += 1
            self.log_event(f"PID: {process.pid} is waiting for the resource",
                           EventType.BLOCK, process.pid)

    def preempt_running(self):
        process = self.running_process
        if process is not None:
            self.running_process = None
            process.state = ProcessState.READY
            self.ready_queue.append(process)
            self.stats.preemptions += 1
            self.log_event(f"PID: {process.pid} has been preempted",
                           EventType.PREEMPTION, process.pid)

    def dispatch_ready(self):
        if self.running_process is not None:
            raise RuntimeError("The running process must be detached before dispatching")
        if not self.ready_queue:
            return

        process = self.ready_queue.popleft()
        process.state = ProcessState.RUNNING
        process.running_time_in_slice = 0
        process.dispatch_count += 1
        self.stats.dispatches += 1
        if self.previous_process is not None and self.previous_process.pid != process.pid:
            self.stats.context_switches += 1
        self.previous_process = process
        self.running_process = process
        self.log_event(f"PID: {process.pid} is dispatched", EventType.DISPATCH, process.pid)

    def occupy_resource(self):
        process = self.running_process
        if process is not None:
            self.resource.occupy(process.pid)
            self.log_event(f"Resource occupied by PID: {process.pid}",
                           EventType.RESOURCE_OCCUPY, process.pid)

    # ----- per-tick policy -----

    def request_resource(self):
        """Resource handshake for the running process, before it runs this tick"""
        process = self.running_process
        if process is None or not process.is_requesting_resource():
            return
        if self.resource.is_free():
            self.occupy_resource()
        elif not self.resource.is_held_by(process.pid):
            self.block_running()

    def run_tick(self) -> int:
        """
        Resource handshake then one tick of work

        Returns:
            1 if a process executed this tick, otherwise 0
        """
        self.request_resource()

        process = self.running_process
        if process is None:
            return 0

        self.add_to_gantt_chart(process.pid, self.current_tick, self.current_tick + 1,
                                ProcessState.RUNNING)
        process.execute()
        self.current_tick += 1
        self.stats.productive_ticks += 1

        if process.is_completed():
            self.finish_running()
        return 1

    def dispatch(self):
        """Aging, reordering, preemption check and dispatch"""
        age_priorities(self.running_process, self.ready_queue)
        move_highest_priority_to_front(self.ready_queue)

        running = self.running_process
        if running is not None:
            if running.running_time_in_slice >= self.time_slice:
                self.log_event(f"Time slice used up by PID: {running.pid}",
                               EventType.TIME_SLICE_EXPIRED, running.pid)
                self.preempt_running()
            elif self.ready_queue and self.ready_queue[0].priority < running.priority:
                self.preempt_running()

        if self.running_process is None:
            self.dispatch_ready()

    def step(self, on_tick: Optional[Callable[[TickSnapshot], None]] = None) -> bool:
        """
        One scheduler iteration followed by a trace snapshot

        Returns:
            True when nothing is running after dispatch (simulation complete)
        """
        self.last_tick_executed = self.run_tick()
        self.dispatch()
        self.stats.iterations += 1
        self.record_snapshot(on_tick)
        return self.running_process is None

    def run_all(self, fast: bool = True,
                on_tick: Optional[Callable[[TickSnapshot], None]] = None) -> Dict:
        """Run to completion"""
        self.log_event(f"===== {self.name} Scheduling Started =====")

        while True:
            complete = self.step(on_tick)
            if not fast and self.last_tick_executed:
                time.sleep(PACING_DELAY)
            if complete:
                break

        self.log_event(f"===== {self.name} Scheduling Completed =====")
        return self.get_results()
