"""
Test suite for the memoquill project.
"""
