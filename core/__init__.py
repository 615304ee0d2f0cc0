"""
Core data structures and state management for the album dashboard.

Modules:
- models: Immutable data structures (Stage, Song, Album)
- progress: Song/album completion and eligibility
- migration: Older stored shapes -> current shape
- persistence: Album record storage and JSON snapshots
- state: The session's album and all edits to it
- router: Grid vs. zoomed-song navigation
- countdown: Time left until the release deadline
- settings: User settings file
- constants: Default stages, catalog, storage key, etc.
"""
