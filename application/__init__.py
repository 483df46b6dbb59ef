"""
Application Layer for the workout session core.

This package contains:
- ports/: Abstract interfaces (what the session needs)
- session/: The active-workout state machine and its owner
- exceptions: Error taxonomy shared with the infrastructure layer
"""
