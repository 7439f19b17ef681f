"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskKind) and date-time parsing
- task_codec.py: single-line record encode/decode
- task_store.py: in-memory TaskList + line-oriented file storage
"""
