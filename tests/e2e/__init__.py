"""
End-to-end conference test package.

This package drives several real browsers (one per participant) against
a running conference deployment and demonstrates:
- Multi-participant session management through an explicit fixture
- Page Object Model (POM) pattern
- Polling waits for animated UI transitions
- Ordered scenario steps sharing one module-scoped conference
"""
