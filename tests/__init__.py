"""
Test package for buildtree.
"""
