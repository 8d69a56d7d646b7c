from .github_client import GitHubContentsClient as GitHubContentsClient
from .local_store import LocalRecordStore as LocalRecordStore
from .remote_store import RemoteRecordStore as RemoteRecordStore

__all__ = ["GitHubContentsClient", "LocalRecordStore", "RemoteRecordStore"]
