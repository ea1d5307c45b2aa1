"""
Visualization module: PCB tables and Gantt chart
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import Dict, Iterable, List, Optional, Union
from core.process import Process, ProcessState
from core.scheduler_base import GanttEntry, TickSnapshot


PCB_COLUMNS = [
    ('PID', 'pid'),
    ('Name', 'name'),
    ('State', 'state'),
    ('Priority', 'priority'),
    ('Type', 'process_type'),
    ('Running Time', 'running_time'),
    ('Total Time', 'total_time'),
    ('Resource Request Time', 'resource_request_time'),
]


class Visualizer:
    """Scheduling result visualization"""

    def __init__(self):
        self.colors = plt.cm.Set3.colors

    @staticmethod
    def format_pcb_table(processes: Iterable[Union[Process, Dict]]) -> str:
        """
        PCB table sorted by state

        Args:
            processes: Process objects or snapshot rows

        Returns:
            table text
        """
        rows = [p.to_dict() if isinstance(p, Process) else p for p in processes]
        rows.sort(key=lambda row: ProcessState(row['state']).order)

        cells = [[str(row[key]) for _, key in PCB_COLUMNS] for row in rows]
        widths = [len(title) for title, _ in PCB_COLUMNS]
        for line in cells:
            widths = [max(w, len(c)) for w, c in zip(widths, line)]

        separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
        header = "| " + " | ".join(title.ljust(w) for (title, _), w in zip(PCB_COLUMNS, widths)) + " |"
        lines = [separator, header, separator]
        for line in cells:
            lines.append("| " + " | ".join(c.ljust(w) for c, w in zip(line, widths)) + " |")
        lines.append(separator)
        return "\n".join(lines)

    def print_pcb_table(self, processes: Iterable[Union[Process, Dict]]):
        print(self.format_pcb_table(processes))

    def print_tick(self, snapshot: TickSnapshot):
        """Trace sink: print every process after one tick"""
        print(f"+ PCB list (tick = {snapshot.tick})")
        self.print_pcb_table(snapshot.processes)

    def print_statistics_table(self, result: Dict):
        """
        Print statistics and per-process details

        Args:
            result: scheduler results dictionary
        """
        stats = result['statistics']
        print("\n" + "=" * 80)
        print(f"Results - {result['algorithm']}")
        print("=" * 80)
        print(f"{'Total ticks':<30} {result['ticks']:>10}")
        print(f"{'Avg turnaround time':<30} {stats['avg_turnaround_time']:>10.2f}")
        print(f"{'Avg waiting time':<30} {stats['avg_waiting_time']:>10.2f}")
        print(f"{'Iterations':<30} {stats['iterations']:>10}")
        print(f"{'Dispatches':<30} {stats['dispatches']:>10}")
        print(f"{'Context switches':<30} {stats['context_switches']:>10}")
        print(f"{'Preemptions':<30} {stats['preemptions']:>10}")
        print(f"{'Blocks on resource':<30} {stats['blocks']:>10}")
        print("-" * 80)
        print(f"{'PID':<6} {'Name':<16} {'Total':>8} {'Finished at':>12} {'Dispatches':>12}")
        print("-" * 80)
        for process in sorted(result['processes'], key=lambda p: p.pid):
            print(f"{process.pid:<6} {process.name:<16} {process.total_time:>8} "
                  f"{process.finish_tick:>12} {process.dispatch_count:>12}")
        print("=" * 80 + "\n")

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         save_path: Optional[str] = None, show: bool = True):
        """
        Draw the Gantt chart

        Args:
            gantt_data: Gantt chart data
            algorithm_name: algorithm name
            save_path: output path (None: do not save)
            show: whether to show the window
        """
        if not gantt_data:
            print(f"No Gantt chart data for {algorithm_name}")
            return

        fig, ax = plt.subplots(figsize=(16, 6))

        unique_pids = sorted(set(entry.pid for entry in gantt_data))
        pid_to_y = {pid: idx for idx, pid in enumerate(unique_pids)}

        for entry in gantt_data:
            duration = entry.end_time - entry.start_time
            y_pos = pid_to_y[entry.pid]
            color = self.colors[entry.pid % len(self.colors)]

            ax.barh(y_pos, duration, left=entry.start_time, height=0.8,
                    color=color, edgecolor='black', linewidth=0.5)

            if duration > 1:
                ax.text(entry.start_time + duration / 2, y_pos, f'P{entry.pid}',
                        ha='center', va='center', fontsize=8, fontweight='bold')

        ax.set_yticks(range(len(unique_pids)))
        ax.set_yticklabels([f'P{pid}' for pid in unique_pids])
        ax.set_xlabel('Tick', fontsize=12)
        ax.set_ylabel('Process', fontsize=12)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        legend_elements = [mpatches.Patch(color=self.colors[0], label='Running')]
        ax.legend(handles=legend_elements, loc='upper right')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"[DONE] Gantt chart saved to {save_path}")

        if show:
            plt.show()
        else:
            plt.close(fig)
