#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PCB Scheduler Simulator - command line entry point
"""

import sys
import argparse

from utils.input_parser import InputParser
from utils.visualization import Visualizer
from schedulers.aging_round_robin import AgingRoundRobinScheduler


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Round Robin scheduler with priority aging and a shared resource')
    parser.add_argument('-i', '--input-file', default='mock_pcb.json',
                        help='Path to the pcb_list JSON file (default: mock_pcb.json)')
    parser.add_argument('-f', '--fast', action='store_true',
                        help='Do not pause between ticks')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Do not print the PCB table and events after each tick')
    parser.add_argument('--gantt', metavar='PATH',
                        help='Save a Gantt chart of the run to PATH')
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        processes = InputParser.parse_file(args.input_file)
    except Exception as e:
        print(f"[ERROR] Failed to load '{args.input_file}': {e}")
        return 1

    visualizer = Visualizer()
    visualizer.print_pcb_table(processes)

    try:
        scheduler = AgingRoundRobinScheduler(processes, verbose=not args.quiet)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1

    on_tick = None if args.quiet else visualizer.print_tick
    result = scheduler.run_all(fast=args.fast, on_tick=on_tick)

    visualizer.print_statistics_table(result)
    if args.gantt:
        visualizer.draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                    save_path=args.gantt, show=False)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nSimulation interrupted by user.")
        sys.exit(0)
