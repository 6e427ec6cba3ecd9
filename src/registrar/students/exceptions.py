"""Custom exceptions for student records."""


class StudentError(Exception):
    """Base exception for student record errors."""


class EmptyTranscriptError(StudentError):
    """GPA requested for a transcript with no recorded units."""
