"""
CPU Scheduling Algorithms
"""

from .aging_round_robin import (AgingRoundRobinScheduler, age_priorities,
                                move_highest_priority_to_front)

__all__ = [
    'AgingRoundRobinScheduler',
    'age_priorities',
    'move_highest_priority_to_front',
]
