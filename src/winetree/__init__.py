"""Decision-tree walkthrough on the red wine-quality dataset."""

__version__ = "0.1.0"
