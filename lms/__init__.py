"""LMS backend: grading store and rooms inventory API."""
