"""Team board: tasks on a three-stage board, calendar, peer feedback and notifications."""

__version__ = "0.1.0"
