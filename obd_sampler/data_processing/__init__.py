"""Data processing package"""
from .validator import FileValidator
from .reader import SequentialReader
from .consolidator import Consolidator
from .sampler import Sampler
from .table_parser import parse_table
from .chart_projector import ChartProjector

__all__ = ['FileValidator', 'SequentialReader', 'Consolidator', 'Sampler', 'parse_table', 'ChartProjector']
