"""
Controllers drive the Store from outside stimuli (timers).
"""
