"""
Utility modules
"""

from .input_parser import InputParser, PCBModel, PCBListFile
from .visualization import Visualizer

__all__ = ['InputParser', 'PCBModel', 'PCBListFile', 'Visualizer']
