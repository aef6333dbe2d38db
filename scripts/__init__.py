"""Run-once administrative and diagnostic tools for users and sessions."""
