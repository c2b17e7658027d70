from .metrics_aggregator import MetricsAggregator
from .release_feed import DEFAULT_PROGRESSION, SimulatedReleaseFeed, load_progression
from .synthetic import RandomSyntheticMetrics, SyntheticMetricSource, SyntheticRanges
from .update_oracle import UpdateOracle

__all__ = [
    "DEFAULT_PROGRESSION",
    "MetricsAggregator",
    "RandomSyntheticMetrics",
    "SimulatedReleaseFeed",
    "SyntheticMetricSource",
    "SyntheticRanges",
    "UpdateOracle",
    "load_progression",
]
