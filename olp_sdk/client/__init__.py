"""Client-side configuration and network seams.

Submodules:
    - settings: ClientSettings, owner of the per-client cache.
    - download: DownloadManager protocol and its httpx implementation.
    - lookup: Cache-aside base-URL resolution via the API Lookup Service.
    - errors: HttpError.
"""
