"""digiVIT position logger.

Polls a Kaman digiVIT position sensor over UDP and logs the readings to CSV.
The pieces are kept small and importable on their own:
- :mod:`protocol` builds the command frame and talks UDP to the sensor.
- :mod:`core` drives the sampling loop and holds the shared dataclasses.
- :mod:`dataio` owns the log file name and the CSV writes.
- :mod:`cli` is the command-line front end.
"""

__version__ = "1.5.0"
