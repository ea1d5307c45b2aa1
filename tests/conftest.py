import os

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from core.process import Process, ProcessType


def make_process(pid, total_time, resource_request_time, priority=0, name=None,
                 process_type=ProcessType.USER, **kwargs):
    return Process(pid=pid, name=name or f"p{pid}", priority=priority,
                   process_type=process_type, total_time=total_time,
                   resource_request_time=resource_request_time, **kwargs)


@pytest.fixture
def scenario_a():
    return [
        make_process(1, total_time=4, resource_request_time=1),
        make_process(2, total_time=2, resource_request_time=0),
    ]


@pytest.fixture
def contention():
    # pid 2 blocks on the resource held by pid 1; pid 3 never requests it
    return [
        make_process(1, total_time=3, resource_request_time=0),
        make_process(2, total_time=2, resource_request_time=0),
        make_process(3, total_time=4, resource_request_time=10),
    ]
