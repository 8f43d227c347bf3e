"""Client-side data sync: API client, snapshots, reconciliation and offline queue."""

from cricket_pro.sync.api_client import CricketApiClient
from cricket_pro.sync.auto_import import ReconcileResult, reconcile
from cricket_pro.sync.export_manager import DataExportManager, SnapshotFormatError, clear_all_data
from cricket_pro.sync.gateway import DataGateway, RepositoryGateway
from cricket_pro.sync.local_store import LocalStore
from cricket_pro.sync.pending_queue import PendingSyncQueue, PendingWrite

__all__ = [
    "CricketApiClient",
    "ReconcileResult",
    "reconcile",
    "DataExportManager",
    "SnapshotFormatError",
    "clear_all_data",
    "DataGateway",
    "RepositoryGateway",
    "LocalStore",
    "PendingSyncQueue",
    "PendingWrite",
]
