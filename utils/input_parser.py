"""
Input data parser and process generation module
"""

import json
import random
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator
from core.process import Process, ProcessState, ProcessType, MAX_PRIORITY, MIN_PRIORITY


class PCBModel(BaseModel):
    """One entry of the `pcb_list` document"""
    pid: int
    name: str
    state: ProcessState = ProcessState.READY
    priority: int = Field(ge=MIN_PRIORITY, le=MAX_PRIORITY)
    process_type: ProcessType
    running_time: int = Field(default=0, ge=0)
    running_time_in_slice: int = Field(default=0, ge=0)
    total_time: int = Field(gt=0)
    resource_request_time: int = Field(ge=0)

    @model_validator(mode="after")
    def check_counters(self) -> "PCBModel":
        if self.running_time >= self.total_time:
            raise ValueError(f"running_time ({self.running_time}) must be less than "
                             f"total_time ({self.total_time})")
        if self.running_time_in_slice > self.running_time:
            raise ValueError(f"running_time_in_slice ({self.running_time_in_slice}) must not "
                             f"exceed running_time ({self.running_time})")
        return self

    def to_process(self) -> Process:
        return Process(
            pid=self.pid,
            name=self.name,
            priority=self.priority,
            process_type=self.process_type,
            total_time=self.total_time,
            resource_request_time=self.resource_request_time,
            state=self.state,
            running_time=self.running_time,
            running_time_in_slice=self.running_time_in_slice,
        )

    @classmethod
    def from_process(cls, process: Process) -> 'PCBModel':
        return cls(
            pid=process.pid,
            name=process.name,
            state=process.state,
            priority=process.priority,
            process_type=process.process_type,
            running_time=process.running_time,
            running_time_in_slice=process.running_time_in_slice,
            total_time=process.total_time,
            resource_request_time=process.resource_request_time,
        )


class PCBListFile(BaseModel):
    """Input file: {"pcb_list": [...]}"""
    pcb_list: List[PCBModel]

    def to_processes(self) -> List[Process]:
        return [pcb.to_process() for pcb in self.pcb_list]


class InputParser:
    """Input file parser"""

    @staticmethod
    def parse_text(text: str) -> List[Process]:
        """
        Parse a JSON document into processes

        Raises:
            pydantic.ValidationError: malformed JSON or invalid fields
        """
        return PCBListFile.model_validate_json(text).to_processes()

    @staticmethod
    def parse_file(filename: str) -> List[Process]:
        """
        Read processes from a JSON file

        File format: {"pcb_list": [{"pid": 1, "name": "init", "priority": 0,
                      "process_type": "System", "total_time": 4,
                      "resource_request_time": 1}, ...]}

        Args:
            filename: input file path

        Returns:
            process list

        Raises:
            FileNotFoundError: the file does not exist
            pydantic.ValidationError: malformed content
        """
        with open(filename, 'r', encoding='utf-8') as f:
            processes = InputParser.parse_text(f.read())

        print(f"[INFO] Loaded {len(processes)} processes from {filename}")
        return processes

    @staticmethod
    def generate_random_processes(num_processes: int = 5,
                                  max_total_time: int = 8,
                                  seed: Optional[int] = None) -> List[Process]:
        """
        Generate random processes

        Args:
            num_processes: number of processes
            max_total_time: largest total time
            seed: random seed

        Returns:
            process list
        """
        rng = random.Random(seed)

        processes = []
        for pid in range(1, num_processes + 1):
            total_time = rng.randint(1, max_total_time)
            # a request time equal to total_time is never reached
            resource_request_time = rng.randint(0, total_time)
            process_type = ProcessType.SYSTEM if rng.random() < 0.3 else ProcessType.USER
            processes.append(Process(
                pid=pid,
                name=f"proc{pid}",
                priority=rng.randint(-10, 10),
                process_type=process_type,
                total_time=total_time,
                resource_request_time=resource_request_time,
            ))

        return processes

    @staticmethod
    def save_processes_to_file(processes: List[Process], filename: str):
        """
        Save processes as a `pcb_list` JSON document

        Args:
            processes: processes to save
            filename: output file path
        """
        document = PCBListFile(pcb_list=[PCBModel.from_process(p) for p in processes])
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(document.model_dump(mode='json'), f, indent=2)

        print(f"[DONE] Saved {len(processes)} processes to {filename}")
