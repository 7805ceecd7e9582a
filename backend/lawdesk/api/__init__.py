"""HTTP layer: aggregated router and resource route modules."""
