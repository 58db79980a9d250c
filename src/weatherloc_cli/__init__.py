"""weatherloc command line interface."""
