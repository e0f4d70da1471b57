"""Cross-platform team import and sync tracking."""

from .platform_manager import PlatformManager, SyncState, SyncStatus, platform_manager

__all__ = ["PlatformManager", "SyncState", "SyncStatus", "platform_manager"]
