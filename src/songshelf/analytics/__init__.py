from songshelf.analytics.ranking import compute_top_albums, compute_top_artists
from songshelf.analytics.stats import StatsAggregator, compute_stats

__all__ = ["StatsAggregator", "compute_stats", "compute_top_albums", "compute_top_artists"]
