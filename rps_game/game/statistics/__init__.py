"""
统计模块
Statistics Module
"""
from .stats_aggregator import StatsAggregator, Stats, ChoiceStats

__all__ = ['StatsAggregator', 'Stats', 'ChoiceStats']
