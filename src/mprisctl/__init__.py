"""mprisctl - control MPRIS media players from the command line."""

__version__ = "0.3.0"
