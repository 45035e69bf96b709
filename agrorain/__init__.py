"""AgroRain: rainfall gauges, records, statistics and KML export."""

__version__ = "0.1.0"
