"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 06 2025
# SPDX-License-Identifier: MIT
"""

import logging
import math
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from volunteer_scheduler.config import settings
from volunteer_scheduler.exceptions import SchedulerError, StorageError, ValidationError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(db: Session, action: str):
    """
    Rolls the session back on any failure and re-raises driver errors as StorageError.
    Domain errors raised inside the block pass through unchanged.
    """
    try:
        yield
    except SchedulerError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storage failure while trying to %s", action)
        raise StorageError(original=exc) from exc


def validate_pagination(page: int, limit: Optional[int]) -> int:
    """
    Checks page/limit and returns the effective limit.
    """
    if limit is None:
        limit = settings.default_page_size
    invalid = []
    if page is None or page < 1:
        invalid.append("page")
    if limit < 1 or limit > settings.max_page_size:
        invalid.append("limit")
    if invalid:
        raise ValidationError(
            f"Invalid pagination: page must be >= 1 and limit between 1 and {settings.max_page_size}",
            fields=invalid,
        )
    return limit


def paginate(query: Query, page: int, limit: int) -> dict:
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return {
        "items": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if total else 0,
        },
    }


def like_pattern(term: str) -> str:
    return f"%{term.strip()}%"
