"""JobFit: turn a job description and a resume into tailored application material."""

__version__ = "0.1.0"
