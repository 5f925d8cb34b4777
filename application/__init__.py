"""
Application Layer for the program importer.

This package contains:
- ports/: Abstract repository interfaces (what the use cases need)
- use_cases/: Import orchestration (parse, resolve exercises, persist)
- exceptions.py: Errors shared with the infrastructure layer
"""
