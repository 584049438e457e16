"""
Core layer.

Components:
- errors.py: error taxonomy (validation / not found / forbidden)
- ports.py: the Clock protocol the store depends on
- state.py: per-session AppState wiring
"""
