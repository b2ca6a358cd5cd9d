"""
Core application logic for the launch sequence.

The `StartupOrchestrator` drives the sequence, delegating the invalidation
decision to `version_gate`, the backup-before-clear workflow to the
`CacheBackupCoordinator` and the release check to the `UpdateChecker`. The
`FolderRegistry` owns the watched folders.
"""
