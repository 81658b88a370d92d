"""
Source vs destination content reconciliation for Press Sync migrations.

Validators read a local dataset, ask the remote site for the same records,
and report where the two copies diverge.
"""

__version__ = "0.1.0"
