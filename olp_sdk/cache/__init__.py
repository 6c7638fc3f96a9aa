"""In-memory caches and the repositories built on them.

Submodules:
    - lru: Generic least-recently-used cache with optional entry weights.
    - key_value: String cache bounded by total UTF-8 bytes.
    - repositories: Key construction and (de)serialization for API base
      URLs, quadtree indexes, and catalog configurations.
"""
