"""StorySpoil API suite.

End-to-end checks for the StorySpoil story service: user registration,
authentication and story CRUD, run as one ordered sequence of scenarios.
"""

__version__ = "0.1.0"
