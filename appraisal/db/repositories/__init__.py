"""
Per-domain repository modules for database access.

Repository functions only execute statements and flush; the workflow services
own the transaction boundary and decide when to commit or roll back.
"""
