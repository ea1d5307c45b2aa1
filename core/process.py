"""
Process Control Block (PCB) module
"""

from enum import Enum
from typing import Dict, Optional
from copy import deepcopy


# Lower number means higher priority
MAX_PRIORITY = 19
MIN_PRIORITY = -20


class ProcessState(Enum):
    """Process state (declaration order is the table sort order)"""
    RUNNING = "Running"
    READY = "Ready"
    WAITING = "Waiting"
    FINISHED = "Finished"

    @property
    def order(self) -> int:
        return list(ProcessState).index(self)


class ProcessType(Enum):
    """Process type (informational only)"""
    SYSTEM = "System"
    USER = "User"


class Process:
    """
    Process Control Block (PCB)
    Identity, state, priority and timing counters of one simulated process
    """

    def __init__(self, pid: int, name: str, priority: int, process_type: ProcessType,
                 total_time: int, resource_request_time: int,
                 state: ProcessState = ProcessState.READY,
                 running_time: int = 0, running_time_in_slice: int = 0):
        """
        Initialize a process

        Args:
            pid: process ID
            name: display name
            priority: priority from -20 to 19 (lower is higher priority)
            process_type: System or User
            total_time: ticks the process runs before it is finished
            resource_request_time: running time at which the process requests the resource
            state: initial state
            running_time: ticks already executed
            running_time_in_slice: ticks executed in the current time slice
        """
        self.pid = pid
        self.name = name
        self.state = state
        self.priority = priority
        self.process_type = process_type
        self.running_time = running_time
        self.running_time_in_slice = running_time_in_slice
        self.total_time = total_time
        self.resource_request_time = resource_request_time

        # statistics
        self.finish_tick: Optional[int] = None  # productive tick at which it finished
        self.dispatch_count = 0

    def execute(self):
        """Run for one tick"""
        self.running_time += 1
        self.running_time_in_slice += 1

    def is_completed(self) -> bool:
        return self.running_time == self.total_time

    def is_requesting_resource(self) -> bool:
        """The resource request fires only at the exact tick"""
        return self.running_time == self.resource_request_time

    def to_dict(self) -> Dict:
        return {
            'pid': self.pid,
            'name': self.name,
            'state': self.state.value,
            'priority': self.priority,
            'process_type': self.process_type.value,
            'running_time': self.running_time,
            'running_time_in_slice': self.running_time_in_slice,
            'total_time': self.total_time,
            'resource_request_time': self.resource_request_time,
        }

    def __repr__(self):
        return f"P{self.pid}[{self.state.value}]"

    def __str__(self):
        return f"Process {self.pid} ({self.name}): State={self.state.value}, " \
               f"Priority={self.priority}, Running={self.running_time}/{self.total_time}"


def create_process_copy(process: Process) -> Process:
    """
    Deep copy of a process
    Lets several simulations run on the same input independently
    """
    return deepcopy(process)
