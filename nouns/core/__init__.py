"""
Core - noun models, linguistic helpers and exception types.
"""
