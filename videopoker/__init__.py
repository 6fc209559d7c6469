"""Video-Poker-over-SSH: Jacks or Better tables served over SSH and TCP."""

from .version import VERSION as __version__
