"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter, TaskStats) and timestamp helpers
- task_store.py: key/value-backed collection + query/update helpers
"""
