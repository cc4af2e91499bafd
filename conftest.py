"""
Pytest configuration shared by the whole suite.
Uses in-memory SQLite database for fast, isolated tests.
"""
import os

# Set testing environment before importing the app
os.environ["TESTING"] = "True"
os.environ["DEBUG"] = "False"
