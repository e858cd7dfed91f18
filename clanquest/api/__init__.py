"""HTTP API over the tick engine."""
