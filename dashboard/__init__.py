"""Portfolio dashboard: a sector-grouped stock portfolio view with live quotes."""
