"""World Wiki - navigable hypertext views over simulated world state."""

__version__ = "0.1.0"
