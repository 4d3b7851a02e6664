"""State/store layer.

This package owns attribute state and the change-notification engine.
Every mutation, whether it arrives directly or through a proxy, is diffed
and announced here.
"""
