"""
Application services.

- settings: persisted configuration (Qt-free)
- dialogs: non-blocking Qt file dialogs
"""
