"""Progress module for tracking per-user section mastery."""

from src.progress.models import CONFLICT_KEY, ProgressRecord
from src.progress.repository import ProgressRepository
from src.progress.results import Err, ErrorKind, Ok, Result
from src.progress.service import ProgressService


__all__ = [
    "CONFLICT_KEY",
    "Err",
    "ErrorKind",
    "Ok",
    "ProgressRecord",
    "ProgressRepository",
    "ProgressService",
    "Result",
]
