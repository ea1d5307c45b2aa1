"""
Core modules for the PCB Scheduler Simulator
"""

from .process import (Process, ProcessState, ProcessType, MAX_PRIORITY, MIN_PRIORITY,
                      create_process_copy)
from .resource import Resource
from .scheduler_base import (BaseScheduler, SchedulerStats, GanttEntry, TickSnapshot,
                             EventType, Event, TIME_SLICE, PACING_DELAY)

__all__ = [
    'Process',
    'ProcessState',
    'ProcessType',
    'MAX_PRIORITY',
    'MIN_PRIORITY',
    'create_process_copy',
    'Resource',
    'BaseScheduler',
    'SchedulerStats',
    'GanttEntry',
    'TickSnapshot',
    'EventType',
    'Event',
    'TIME_SLICE',
    'PACING_DELAY',
]
