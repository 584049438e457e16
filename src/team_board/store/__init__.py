"""
Entity store subsystem.

Components:
- models.py: entities and enums (Task, Feedback, Notification, Identity, ...)
- entity_store.py: in-memory store + validated mutations
- notifications.py: notification trigger rules + notification panel
- task_api.py: checklist / attachment / voice-note helpers built on update_task
- seed.py: starter fixture
"""
