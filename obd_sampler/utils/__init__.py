"""Utilities package"""
from .io import (
    get_path,
    ensure_folder,
    write_sampled_file
)
from .column_stats import (
    ColumnStats,
    ColumnStatsFactory,
    parse_leading_int,
    eligible_fields
)
from .file_scanner import FileSystemScanner

__all__ = [
    'get_path', 'ensure_folder', 'write_sampled_file',
    'ColumnStats', 'ColumnStatsFactory', 'parse_leading_int', 'eligible_fields',
    'FileSystemScanner'
]
