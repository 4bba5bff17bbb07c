"""
Aggregator Module
"""
from .data_aggregator import DataAggregator, print_summary

__all__ = [
    "DataAggregator",
    "print_summary",
]
