"""Data input/output helpers (CSV logs and file names).

- :mod:`csv_writer` formats samples and writes them incrementally or in one go.
- :mod:`file_paths` names the log file of a run.
- :mod:`log_loader` reads a written log back for offline review.
"""
