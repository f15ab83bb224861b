"""
Task subsystem.

Components:
- task_models.py: data structures (Task, priority bounds)
- task_store.py: SQLite-backed storage with schema migration
- task_view.py: pure display helpers (priority colours, completion order)
- task_api.py: validated writes followed by a full refresh
"""
