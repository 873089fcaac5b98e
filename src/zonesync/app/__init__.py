"""
The APP layer glues the pure model to Qt: the signal-emitting Store,
persisted preferences and the application bootstrap.
"""
