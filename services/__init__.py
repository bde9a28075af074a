"""Service helpers for the narration backend."""

from .temporary_storage import SegmentWorkspace, sweep_stale_workspaces

__all__ = ["SegmentWorkspace", "sweep_stale_workspaces"]
