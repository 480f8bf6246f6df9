"""Mini Git - a minimal local version-control tool.

Tracks files, snapshots them into content-identified commits,
lists history and restores earlier snapshots.
"""

__version__ = "1.0.0"
