"""
Domain Service Base Class

Every domain service wraps one injected ``AsyncSession`` and performs a
single storage operation per method. Storage failures are caught here,
the transaction is rolled back, and the failure is reported as one of
the ``ServiceError`` types so routes never see SQLAlchemy exceptions.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from food_ordering.core.errors import InternalError, ServiceError

logger = logging.getLogger(__name__)


class BaseService:
    """
    Shared plumbing for domain services.

    Attributes:
        db: Session the service reads and writes through
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    def classify_integrity_error(self, error: IntegrityError) -> Optional[ServiceError]:
        """
        Map a constraint failure to a domain error.

        Subclasses override this for constraints that have a meaning for
        the caller (e.g. a duplicate email). Returning None reports the
        failure as an InternalError.
        """
        return None

    async def commit(self, failure_message: str) -> None:
        """
        Commit the current transaction or roll it back entirely.

        Args:
            failure_message: Generic message returned to the caller on failure

        Raises:
            ServiceError: Classified constraint failure
            InternalError: Any other storage failure
        """
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            classified = self.classify_integrity_error(e)
            if classified is not None:
                raise classified
            logger.exception(f"{failure_message}: {e}")
            raise InternalError(failure_message)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"{failure_message}: {e}")
            raise InternalError(failure_message)
