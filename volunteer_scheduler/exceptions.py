"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 06 2025
# SPDX-License-Identifier: MIT
"""

from typing import List, Optional


class SchedulerError(Exception):
    """
    Base class for errors raised by the crud and service layers.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchedulerError):
    """
    Missing or malformed input. Carries the offending field names.
    """

    status_code = 400

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class ScheduleConflictError(SchedulerError):
    """
    The write would give a volunteer two overlapping non-cancelled shifts.
    """

    status_code = 409

    def __init__(
        self,
        message: str = "Volunteer time conflict, cannot schedule",
        conflicting_schedule_id: Optional[int] = None,
    ):
        super().__init__(message)
        self.conflicting_schedule_id = conflicting_schedule_id


class NotFoundError(SchedulerError):
    status_code = 404


class StorageError(SchedulerError):
    """
    The underlying store failed. `original` keeps the driver exception for logging.
    """

    status_code = 500

    def __init__(self, message: str = "Internal storage error", original: Optional[Exception] = None):
        super().__init__(message)
        self.original = original
