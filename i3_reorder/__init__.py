"""i3-reorder - navigate and reorder i3/sway workspaces.

This package provides:
- Next/previous/start/end navigation within an output
- Moving the focused window or swapping whole workspaces
- Collapsing sparse workspace numbers to 0..n-1 per output
- Collision-free rename sequencing over i3 IPC
"""

__version__ = "0.1.0"
__author__ = "i3-reorder contributors"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
