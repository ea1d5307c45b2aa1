"""
PCB Scheduler Simulator - FastAPI backend
"""

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError
from typing import List, Dict, Optional
import asyncio
import json

from core.process import Process
from core.scheduler_base import TIME_SLICE
from schedulers.aging_round_robin import AgingRoundRobinScheduler
from utils.input_parser import PCBModel

app = FastAPI(
    title="PCB Scheduler Simulator",
    description="Round Robin scheduler with priority aging and a single shared resource",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SimulationRequest(BaseModel):
    pcb_list: List[PCBModel]
    time_slice: int = Field(default=TIME_SLICE, gt=0)


class RealtimeInit(BaseModel):
    """WebSocket `init` payload"""
    pcb_list: List[PCBModel] = []
    time_slice: int = Field(default=TIME_SLICE, gt=0)


class RealtimeRun(BaseModel):
    """WebSocket `run` payload (steps per second)"""
    speed: float = Field(default=1.0, gt=0)


class GanttEntry(BaseModel):
    pid: int
    start_time: int
    end_time: int
    state: str


class ProcessResult(BaseModel):
    pid: int
    name: str
    total_time: int
    finish_tick: Optional[int]
    dispatch_count: int


class SimulationResult(BaseModel):
    algorithm: str
    ticks: int
    gantt_chart: List[GanttEntry]
    processes: List[ProcessResult]
    statistics: Dict[str, float]
    event_log: List[str]
    trace: List[Dict]


def create_process_objects(pcb_list: List[PCBModel]) -> List[Process]:
    return [pcb.to_process() for pcb in pcb_list]


def serialize_results(result: Dict) -> Dict:
    """Convert a scheduler results dictionary into plain JSON data"""
    return {
        'algorithm': result['algorithm'],
        'ticks': result['ticks'],
        'gantt_chart': [
            {
                'pid': entry.pid,
                'start_time': entry.start_time,
                'end_time': entry.end_time,
                'state': entry.state.value,
            }
            for entry in result['gantt_chart']
        ],
        'processes': [
            {
                'pid': p.pid,
                'name': p.name,
                'total_time': p.total_time,
                'finish_tick': p.finish_tick,
                'dispatch_count': p.dispatch_count,
            }
            for p in result['processes']
        ],
        'statistics': result['statistics'],
        'event_log': result['event_log'],
        'trace': [snapshot.to_dict() for snapshot in result['trace']],
    }


def run_scheduler(processes: List[Process], time_slice: int = TIME_SLICE) -> Dict:
    """Run the scheduler to completion and return serialized results"""
    scheduler = AgingRoundRobinScheduler(processes, time_slice=time_slice)
    return serialize_results(scheduler.run_all(fast=True))


@app.get("/")
async def root():
    return {"message": "PCB Scheduler Simulator API", "version": "1.0.0"}


@app.post("/simulate", response_model=SimulationResult)
async def simulate(request: SimulationRequest):
    """Run one simulation"""
    try:
        processes = create_process_objects(request.pcb_list)
        return run_scheduler(processes, request.time_slice)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


class RealtimeSimulator:
    def __init__(self, processes: List[Process], time_slice: int = TIME_SLICE):
        self.scheduler = AgingRoundRobinScheduler(processes, time_slice=time_slice)
        self.is_complete = False
        self.last_log_index = 0

    def step(self) -> Dict:
        """Run one iteration and return the new state"""
        if self.is_complete:
            return {'complete': True}

        is_complete = self.scheduler.step()

        current_log_count = len(self.scheduler.event_log)
        new_logs = self.scheduler.event_log[self.last_log_index:current_log_count]
        self.last_log_index = current_log_count

        result = {
            'complete': is_complete,
            'snapshot': self.scheduler.trace[-1].to_dict(),
            'new_logs': new_logs,
        }

        if is_complete:
            self.is_complete = True
            self.scheduler.update_statistics()
            result['statistics'] = self.scheduler.stats.calculate_averages()

        return result


@app.websocket("/ws/realtime")
async def websocket_realtime(websocket: WebSocket):
    """Realtime simulation over a WebSocket"""
    await websocket.accept()
    simulator = None

    try:
        while True:
            data = await websocket.receive_text()
            message = json.loads(data)

            action = message.get('action')

            if action == 'init':
                try:
                    request = RealtimeInit.model_validate(message)
                    simulator = RealtimeSimulator(create_process_objects(request.pcb_list),
                                                  request.time_slice)
                except (ValidationError, ValueError) as e:
                    await websocket.send_json({'type': 'error', 'message': str(e)})
                    continue

                await websocket.send_json({
                    'type': 'initialized',
                    'algorithm': simulator.scheduler.name,
                    'process_count': len(simulator.scheduler.processes)
                })

            elif action == 'step':
                if simulator:
                    await websocket.send_json({'type': 'step_result', **simulator.step()})

            elif action == 'run':
                if simulator:
                    try:
                        delay = 1.0 / RealtimeRun.model_validate(message).speed
                    except ValidationError as e:
                        await websocket.send_json({'type': 'error', 'message': str(e)})
                        continue

                    while not simulator.is_complete:
                        result = simulator.step()
                        await websocket.send_json({'type': 'step_result', **result})

                        if result['complete']:
                            break

                        await asyncio.sleep(delay)

            else:
                await websocket.send_json({'type': 'error', 'message': f"Unknown action: {action}"})

    except WebSocketDisconnect:
        pass


@app.get("/sample-processes")
async def get_sample_processes():
    """Sample pcb_list documents"""
    return {
        "samples": [
            {
                "name": "Round robin with resource (2 processes)",
                "pcb_list": [
                    {"pid": 1, "name": "init", "priority": 0, "process_type": "System",
                     "total_time": 4, "resource_request_time": 1},
                    {"pid": 2, "name": "shell", "priority": 0, "process_type": "User",
                     "total_time": 2, "resource_request_time": 0}
                ]
            },
            {
                "name": "Resource contention (3 processes)",
                "pcb_list": [
                    {"pid": 1, "name": "writer", "priority": 0, "process_type": "User",
                     "total_time": 5, "resource_request_time": 0},
                    {"pid": 2, "name": "reader", "priority": 0, "process_type": "User",
                     "total_time": 3, "resource_request_time": 1},
                    {"pid": 3, "name": "daemon", "priority": 10, "process_type": "System",
                     "total_time": 2, "resource_request_time": 2}
                ]
            }
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
