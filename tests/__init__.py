"""Pulseboard test suite; the repository root is put on ``sys.path`` by pytest's ``pythonpath`` setting."""
