"""
Test fixtures for mktree.
"""
