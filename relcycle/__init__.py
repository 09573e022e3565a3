"""relcycle: release a -SNAPSHOT project, then open the next development cycle."""

__version__ = "0.1.0"
