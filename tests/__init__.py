"""
Only the root tests directory carries an __init__.py, so `tests.helpers` is importable from
every test module. Subdirectories are namespace packages (PEP 420).
"""
