"""branchlog - branch history against its upstream, at a glance."""

__version__ = "0.1.0"
